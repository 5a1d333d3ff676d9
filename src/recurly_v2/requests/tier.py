from __future__ import annotations

from pydantic import Field

from recurly_v2.requests.base import Request


class TierPricing(Request):
    nodename = "currency"

    currency: str = Field(..., min_length=3, max_length=3, description="3-letter ISO 4217 currency code.")
    unit_amount_in_cents: int = Field(..., ge=0, description="Unit price for the tier, in cents.")


class Tier(Request):
    nodename = "tier"

    currencies: list[TierPricing] = Field(default_factory=list, description="Tier pricing.")
    ending_quantity: int | None = Field(
        default=None,
        ge=1,
        description="Ending quantity for the tier. This represents a unit amount for unit-priced add ons.",
    )
