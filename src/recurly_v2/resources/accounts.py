"""Cuentas y sus datos asociados.

Por qué en un solo módulo:
- `Account` embebe direcciones, billing info, custom fields y adquisición; tenerlos
  juntos evita referencias adelantadas entre módulos.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.core.domain.money import Money
from recurly_v2.resources.base import Resource

if TYPE_CHECKING:
    from recurly_v2.resources.billing import Adjustment


class Address(Resource):
    embedded = True

    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None


class ShippingAddress(Resource):
    identifier = "id"

    id: int | None = None
    nickname: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    email: str | None = None
    vat_number: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CustomField(Resource):
    embedded = True

    name: str | None = None
    value: str | None = None


class AccountAcquisition(Resource):
    embedded = True

    cost_in_cents: int | None = None
    currency: str | None = None
    channel: str | None = None
    subchannel: str | None = None
    campaign: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BillingInfo(Resource):
    """Medio de pago de una cuenta. Los datos de tarjeta/banco nunca se loguean."""

    embedded = True
    sensitive = frozenset({"number", "verification_value", "account_number", "routing_number", "iban"})
    read_only = frozenset({"card_type", "first_six", "last_four"})

    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None
    vat_number: str | None = None
    ip_address: str | None = None
    ip_address_country: str | None = None
    card_type: str | None = None
    year: int | None = None
    month: int | None = None
    first_six: str | None = None
    last_four: str | None = None
    number: str | None = None
    verification_value: str | None = None
    token_id: str | None = None
    paypal_billing_agreement_id: str | None = None
    amazon_billing_agreement_id: str | None = None
    name_on_account: str | None = None
    account_type: str | None = None
    routing_number: str | None = None
    account_number: str | None = None
    iban: str | None = None
    sort_code: str | None = None
    bsb_code: str | None = None
    type: str | None = None
    updated_at: datetime | None = None


class AccountBalance(Resource):
    embedded = True

    past_due: bool | None = None
    balance_in_cents: Money | None = None


class Note(Resource):
    read_only = frozenset({"message"})
    has_one = {"account": "Account"}

    message: str | None = None
    created_at: datetime | None = None


class Account(Resource):
    """Cliente facturable, identificado por `account_code`."""

    collection_path = "accounts"
    identifier = "account_code"
    sensitive = BillingInfo.sensitive
    read_only = frozenset(
        {
            "state",
            "closed_at",
            "hosted_login_token",
            "has_live_subscription",
            "has_active_subscription",
            "has_future_subscription",
            "has_canceled_subscription",
            "has_paused_subscription",
            "has_past_due_invoice",
        }
    )
    has_many = {
        "adjustments": "Adjustment",
        "invoices": "Invoice",
        "subscriptions": "Subscription",
        "transactions": "Transaction",
        "notes": "Note",
        "redemptions": "Redemption",
        "shipping_addresses": "ShippingAddress",
    }
    has_one = {"billing_info": "BillingInfo"}

    account_code: str | None = None
    state: str | None = None
    username: str | None = None
    email: str | None = None
    cc_emails: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company_name: str | None = None
    vat_number: str | None = None
    tax_exempt: bool | None = None
    entity_use_code: str | None = None
    accept_language: str | None = None
    preferred_locale: str | None = None
    parent_account_code: str | None = None
    exemption_certificate: str | None = None
    transaction_type: str | None = None
    dunning_campaign_id: str | None = None
    invoice_template_uuid: str | None = None
    hosted_login_token: str | None = None
    has_live_subscription: bool | None = None
    has_active_subscription: bool | None = None
    has_future_subscription: bool | None = None
    has_canceled_subscription: bool | None = None
    has_paused_subscription: bool | None = None
    has_past_due_invoice: bool | None = None
    address: Address | None = None
    billing_info: BillingInfo | None = None
    shipping_addresses: list[ShippingAddress] | None = None
    custom_fields: list[CustomField] | None = None
    account_acquisition: AccountAcquisition | None = None
    closed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def closed(self) -> bool:
        return self.state == "closed"

    def close_account(self, *, client: ApiClient | None = None) -> bool:
        """DELETE de la cuenta: la API la cierra (no la borra)."""

        api = self._resolve_client(client)
        api.delete(self._require_uri("close_account"))
        self.__dict__["state"] = "closed"
        return True

    def reopen(self, *, client: ApiClient | None = None) -> bool:
        self._action("PUT", "reopen", client=client)
        return True

    def balance(self, *, client: ApiClient | None = None) -> AccountBalance:
        api = self._resolve_client(client)
        response = api.get(f"{self._require_uri('balance')}/balance")
        return AccountBalance.from_response(response, api)

    def add_adjustment(self, adjustment: Adjustment, *, client: ApiClient | None = None) -> bool:
        """Crea un cargo/crédito puntual en la cuenta."""

        return self._create_nested(adjustment, "adjustments", client=client)

    def add_shipping_address(self, address: ShippingAddress, *, client: ApiClient | None = None) -> bool:
        return self._create_nested(address, "shipping_addresses", client=client)

