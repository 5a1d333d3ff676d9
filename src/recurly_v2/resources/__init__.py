"""Recursos de la API.

El orden de import importa: cada módulo solo referencia tipos de los anteriores,
y el registro por nombre (`resource_class`) necesita todas las clases cargadas
para resolver relaciones.
"""

from recurly_v2.resources.base import Resource, resource_class
from recurly_v2.resources.pager import Pager
from recurly_v2.resources.accounts import (
    Account,
    AccountAcquisition,
    AccountBalance,
    Address,
    BillingInfo,
    CustomField,
    Note,
    ShippingAddress,
)
from recurly_v2.resources.catalog import (
    AddOn,
    Coupon,
    Item,
    MeasuredUnit,
    Plan,
    Redemption,
    ShippingMethod,
    Tier,
)
from recurly_v2.resources.subscriptions import Subscription, SubscriptionAddOn, Usage
from recurly_v2.resources.billing import (
    Adjustment,
    CreditPayment,
    Delivery,
    GiftCard,
    Invoice,
    InvoiceCollection,
    JurisDetail,
    Purchase,
    ShippingFee,
    TaxDetail,
    TaxType,
    Transaction,
)
from recurly_v2.resources.dunning import DunningCampaign, DunningCycle

__all__ = [
    "Account",
    "AccountAcquisition",
    "AccountBalance",
    "AddOn",
    "Address",
    "Adjustment",
    "BillingInfo",
    "Coupon",
    "CreditPayment",
    "CustomField",
    "Delivery",
    "DunningCampaign",
    "DunningCycle",
    "GiftCard",
    "Invoice",
    "InvoiceCollection",
    "Item",
    "JurisDetail",
    "MeasuredUnit",
    "Note",
    "Pager",
    "Plan",
    "Purchase",
    "Redemption",
    "Resource",
    "ShippingAddress",
    "ShippingFee",
    "ShippingMethod",
    "Subscription",
    "SubscriptionAddOn",
    "TaxDetail",
    "TaxType",
    "Tier",
    "Transaction",
    "Usage",
    "resource_class",
]
