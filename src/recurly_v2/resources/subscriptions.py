"""Suscripciones y sus acciones de ciclo de vida.

Cada acción (cancel, terminate, pause, ...) es un PUT a `<uri>/<acción>` (o al
anchor `<a name=...>` que trae la respuesta) y recarga el estado devuelto.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal
from urllib.parse import quote

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.requests.subscription import SubscriptionPause
from recurly_v2.resources.accounts import Account, CustomField, ShippingAddress
from recurly_v2.resources.base import Resource
from recurly_v2.resources.catalog import Plan, Tier
from recurly_v2.resources.pager import Pager

REFUND_TYPES = ("none", "partial", "full")


class SubscriptionAddOn(Resource):
    embedded = True

    add_on_code: str | None = None
    add_on_source: str | None = None
    quantity: int | None = None
    unit_amount_in_cents: int | None = None
    usage_percentage: Decimal | None = None
    revenue_schedule_type: str | None = None
    tier_type: str | None = None
    tiers: list[Tier] | None = None


class Usage(Resource):
    identifier = "id"
    read_only = frozenset({"billed_at", "usage_type", "unit_amount_in_cents", "usage_percentage"})

    id: int | None = None
    amount: int | None = None
    merchant_tag: str | None = None
    usage_type: str | None = None
    unit_amount_in_cents: int | None = None
    usage_percentage: Decimal | None = None
    recording_timestamp: datetime | None = None
    usage_timestamp: datetime | None = None
    billed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Subscription(Resource):
    collection_path = "subscriptions"
    identifier = "uuid"
    read_only = frozenset(
        {
            "state",
            "plan",
            "activated_at",
            "canceled_at",
            "expires_at",
            "paused_at",
            "current_period_started_at",
            "current_period_ends_at",
            "trial_started_at",
            "converted_at",
            "tax_in_cents",
            "tax_type",
            "tax_region",
            "tax_rate",
        }
    )
    has_one = {"account": "Account", "invoice": "Invoice"}
    has_many = {"redemptions": "Redemption"}

    uuid: str | None = None
    state: str | None = None
    plan_code: str | None = None
    plan: Plan | None = None
    account: Account | None = None
    currency: str | None = None
    quantity: int | None = None
    unit_amount_in_cents: int | None = None
    coupon_code: str | None = None
    coupon_codes: list[str] | None = None
    gift_card: str | None = None
    subscription_add_ons: list[SubscriptionAddOn] | None = None
    custom_fields: list[CustomField] | None = None
    shipping_address: ShippingAddress | None = None
    shipping_address_id: int | None = None
    shipping_method_code: str | None = None
    shipping_amount_in_cents: int | None = None
    collection_method: str | None = None
    net_terms: int | None = None
    po_number: str | None = None
    terms_and_conditions: str | None = None
    customer_notes: str | None = None
    vat_reverse_charge_notes: str | None = None
    total_billing_cycles: int | None = None
    remaining_billing_cycles: int | None = None
    renewal_billing_cycles: int | None = None
    remaining_pause_cycles: int | None = None
    auto_renew: bool | None = None
    revenue_schedule_type: str | None = None
    bulk: bool | None = None
    timeframe: str | None = None
    starts_at: datetime | None = None
    trial_ends_at: datetime | None = None
    first_renewal_date: datetime | None = None
    next_bill_date: datetime | None = None
    imported_trial: bool | None = None
    started_with_gift: bool | None = None
    no_billing_info_reason: str | None = None
    tax_in_cents: int | None = None
    tax_type: str | None = None
    tax_region: str | None = None
    tax_rate: Decimal | None = None
    activated_at: datetime | None = None
    canceled_at: datetime | None = None
    expires_at: datetime | None = None
    paused_at: datetime | None = None
    resume_at: datetime | None = None
    current_period_started_at: datetime | None = None
    current_period_ends_at: datetime | None = None
    trial_started_at: datetime | None = None
    converted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def cancel(self, *, timeframe: str | None = None, client: ApiClient | None = None) -> bool:
        """Cancela al final del periodo (o en `timeframe`). Se puede reactivar."""

        self._action("PUT", "cancel", client=client, timeframe=timeframe)
        return True

    def terminate(
        self,
        refund: Literal["none", "partial", "full"] = "none",
        *,
        client: ApiClient | None = None,
    ) -> bool:
        """Termina inmediatamente, con reembolso `none`, `partial` o `full`."""

        if refund not in REFUND_TYPES:
            raise ValueError(f"refund must be one of {', '.join(REFUND_TYPES)}; got {refund!r}")
        self._action("PUT", "terminate", client=client, refund=refund)
        return True

    def reactivate(self, *, client: ApiClient | None = None) -> bool:
        self._action("PUT", "reactivate", client=client)
        return True

    def postpone(
        self,
        next_renewal_date: date | datetime,
        *,
        bulk: bool = False,
        client: ApiClient | None = None,
    ) -> bool:
        self._action("PUT", "postpone", client=client, next_renewal_date=next_renewal_date, bulk=bulk)
        return True

    def pause(self, remaining_pause_cycles: int, *, client: ApiClient | None = None) -> bool:
        """Pausa en la próxima renovación; `0` anula una pausa programada."""

        body = SubscriptionPause(remaining_pause_cycles=remaining_pause_cycles)
        self._action("PUT", "pause", body=body, client=client)
        return True

    def resume(self, *, client: ApiClient | None = None) -> bool:
        self._action("PUT", "resume", client=client)
        return True

    def usages(self, add_on_code: str, *, client: ApiClient | None = None, **params) -> Pager[Usage]:
        path = f"{self._require_uri('usage')}/add_ons/{quote(add_on_code, safe='')}/usage"
        return Pager(Usage, path, params, self._resolve_client(client))

    def record_usage(self, add_on_code: str, usage: Usage, *, client: ApiClient | None = None) -> bool:
        name = f"add_ons/{quote(add_on_code, safe='')}/usage"
        return self._create_nested(usage, name, client=client)
