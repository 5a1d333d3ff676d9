"""Catálogo: planes, add-ons, items, cupones y unidades de medida."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from urllib.parse import quote

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.core import config
from recurly_v2.core.domain.money import Money
from recurly_v2.requests.add_on import AddOnCreate
from recurly_v2.resources.accounts import CustomField
from recurly_v2.resources.base import Resource


class Tier(Resource):
    """Tramo de precio de un add-on (`tier_type` distinto de `flat`)."""

    embedded = True

    ending_quantity: int | None = None
    unit_amount_in_cents: Money | None = None


class AddOn(Resource):
    identifier = "add_on_code"
    read_only = frozenset({"plan_code"})
    has_one = {"plan": "Plan"}

    plan_code: str | None = None
    add_on_code: str | None = None
    name: str | None = None
    item_code: str | None = None
    external_sku: str | None = None
    display_quantity_on_hosted_page: bool | None = None
    default_quantity: int | None = None
    unit_amount_in_cents: Money | None = None
    accounting_code: str | None = None
    revenue_schedule_type: str | None = None
    tax_code: str | None = None
    add_on_type: str | None = None
    optional: bool | None = None
    measured_unit_id: int | None = None
    usage_type: str | None = None
    usage_percentage: Decimal | None = None
    tier_type: str | None = None
    tiers: list[Tier] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def uri(self) -> str | None:
        if self.href:
            return self.href
        if self.plan_code and self.add_on_code:
            return f"{Plan.member_path(self.plan_code)}/add_ons/{quote(self.add_on_code, safe='')}"
        return None

    def _create_path(self) -> str:
        if not self.plan_code:
            return super()._create_path()
        return f"{Plan.member_path(self.plan_code)}/add_ons"


class Plan(Resource):
    """Plan de suscripción. Los importes son `Money` (uno por moneda)."""

    collection_path = "plans"
    identifier = "plan_code"
    has_many = {"add_ons": "AddOn"}

    plan_code: str | None = None
    name: str | None = None
    description: str | None = None
    success_url: str | None = None
    cancel_url: str | None = None
    display_donation_amounts: bool | None = None
    display_quantity: bool | None = None
    display_phone_number: bool | None = None
    bypass_hosted_confirmation: bool | None = None
    unit_name: str | None = None
    payment_page_tos_link: str | None = None
    plan_interval_length: int | None = None
    plan_interval_unit: str | None = None
    trial_interval_length: int | None = None
    trial_interval_unit: str | None = None
    trial_requires_billing_info: bool | None = None
    total_billing_cycles: int | None = None
    auto_renew: bool | None = None
    accounting_code: str | None = None
    setup_fee_accounting_code: str | None = None
    revenue_schedule_type: str | None = None
    setup_fee_revenue_schedule_type: str | None = None
    tax_exempt: bool | None = None
    tax_code: str | None = None
    avalara_transaction_type: int | None = None
    avalara_service_type: int | None = None
    allow_any_item_on_subscriptions: bool | None = None
    dunning_campaign_id: str | None = None
    unit_amount_in_cents: Money | None = None
    setup_fee_in_cents: Money | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def create_add_on(self, request: AddOnCreate, *, client: ApiClient | None = None) -> AddOn:
        api = self._resolve_client(client)
        response = api.post(f"{self._require_uri('create_add_on')}/add_ons", request)
        return AddOn.from_response(response, api)


class Item(Resource):
    collection_path = "items"
    identifier = "item_code"
    read_only = frozenset({"state", "deleted_at"})

    item_code: str | None = None
    name: str | None = None
    description: str | None = None
    external_sku: str | None = None
    accounting_code: str | None = None
    revenue_schedule_type: str | None = None
    state: str | None = None
    custom_fields: list[CustomField] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class MeasuredUnit(Resource):
    collection_path = "measured_units"
    identifier = "id"

    id: int | None = None
    name: str | None = None
    display_name: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ShippingMethod(Resource):
    collection_path = "shipping_methods"
    identifier = "code"

    code: str | None = None
    name: str | None = None
    accounting_code: str | None = None
    tax_code: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Redemption(Resource):
    read_only = frozenset({"single_use", "total_discounted_in_cents", "state", "coupon_code"})
    has_one = {"account": "Account", "coupon": "Coupon", "subscription": "Subscription"}

    uuid: str | None = None
    account_code: str | None = None
    subscription_uuid: str | None = None
    coupon_code: str | None = None
    currency: str | None = None
    single_use: bool | None = None
    total_discounted_in_cents: int | None = None
    state: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Coupon(Resource):
    """Cupón de descuento. `destroy()` lo expira."""

    collection_path = "coupons"
    identifier = "coupon_code"
    read_only = frozenset({"state", "unique_coupon_codes_count", "deleted_at"})
    has_many = {"redemptions": "Redemption"}

    coupon_code: str | None = None
    name: str | None = None
    state: str | None = None
    description: str | None = None
    hosted_description: str | None = None
    invoice_description: str | None = None
    discount_type: str | None = None
    discount_percent: int | None = None
    discount_in_cents: Money | None = None
    free_trial_amount: int | None = None
    free_trial_unit: str | None = None
    redeem_by_date: datetime | None = None
    single_use: bool | None = None
    applies_for_months: int | None = None
    duration: str | None = None
    temporal_unit: str | None = None
    temporal_amount: int | None = None
    max_redemptions: int | None = None
    max_redemptions_per_account: int | None = None
    applies_to_all_plans: bool | None = None
    applies_to_non_plan_charges: bool | None = None
    redemption_resource: str | None = None
    coupon_type: str | None = None
    unique_code_template: str | None = None
    unique_coupon_codes_count: int | None = None
    plan_codes: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    def redeem(
        self,
        account_code: str,
        *,
        currency: str | None = None,
        subscription_uuid: str | None = None,
        client: ApiClient | None = None,
    ) -> Redemption:
        """Aplica el cupón a una cuenta. Un 422 deja los errores en la redención devuelta."""

        redemption = Redemption(account_code=account_code, currency=currency or config.default_currency())
        if subscription_uuid:
            redemption.subscription_uuid = subscription_uuid
        self._create_nested(redemption, "redeem", client=client)
        return redemption
