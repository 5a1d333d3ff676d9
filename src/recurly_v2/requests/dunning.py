from __future__ import annotations

from pydantic import Field

from recurly_v2.requests.base import Request


class DunningCampaignBulkUpdate(Request):
    """Plans to attach to a dunning campaign in one call."""

    nodename = "dunning_campaign"

    plan_codes: list[str] = Field(..., min_length=1, description="Codes of the plans to reassign.")
