from __future__ import annotations

from pydantic import Field

from recurly_v2.requests.base import Request


class SubscriptionPause(Request):
    nodename = "subscription"

    remaining_pause_cycles: int = Field(..., ge=0, description="Billing cycles to skip; 0 cancels a scheduled pause.")
