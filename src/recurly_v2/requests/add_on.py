from __future__ import annotations

from typing import Literal

from pydantic import Field

from recurly_v2.core.domain.money import Money
from recurly_v2.requests.base import Request
from recurly_v2.requests.tier import Tier


class AddOnCreate(Request):
    """Body for `POST /plans/<plan_code>/add_ons`."""

    nodename = "add_on"

    add_on_code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    unit_amount_in_cents: Money | None = None
    default_quantity: int | None = Field(default=None, ge=0)
    display_quantity_on_hosted_page: bool | None = None
    add_on_type: Literal["fixed", "usage"] | None = None
    usage_type: Literal["price", "percentage"] | None = None
    measured_unit_id: int | None = None
    optional: bool | None = None
    accounting_code: str | None = None
    tier_type: Literal["flat", "tiered", "stairstep", "volume"] | None = None
    tiers: list[Tier] | None = None
