"""Payloads salientes (sin identidad persistida).

Cada módulo declara un esquema fijo sobre `recurly_v2.requests.base.Request`.
"""

from recurly_v2.requests.add_on import AddOnCreate
from recurly_v2.requests.base import Request
from recurly_v2.requests.dunning import DunningCampaignBulkUpdate
from recurly_v2.requests.invoice import InvoiceRefund, LineItemRefund
from recurly_v2.requests.subscription import SubscriptionPause
from recurly_v2.requests.tier import Tier, TierPricing

__all__ = [
    "AddOnCreate",
    "DunningCampaignBulkUpdate",
    "InvoiceRefund",
    "LineItemRefund",
    "Request",
    "SubscriptionPause",
    "Tier",
    "TierPricing",
]
