"""
Dunning campaigns: lookup and assigning a campaign to several plans at once.
"""

from __future__ import annotations

from xml.etree import ElementTree

import pytest

from recurly_v2.resources import DunningCampaign, DunningCycle, Plan

CAMPAIGN = "dunning_campaigns/abcdef1234567890"


@pytest.fixture
def campaign_api(api):
    api.add("GET", CAMPAIGN, "dunning_campaigns/show-200.xml")
    api.add("PUT", f"{CAMPAIGN}/bulk_update", "dunning_campaigns/update-200.xml")
    api.add("GET", "plans/gold", "plans/show-gold-200.xml")
    api.add("GET", "plans/silver", "plans/show-silver-200.xml")
    return api


class TestFind:
    def test_find_by_id(self, campaign_api):
        campaign = DunningCampaign.find("abcdef1234567890")

        assert campaign.id == "abcdef1234567890"
        assert campaign.name == "Default Campaign"
        assert campaign.default is True
        assert campaign.deleted_at is None

    def test_cycles_are_embedded(self, campaign_api):
        campaign = DunningCampaign.find("abcdef1234567890")

        assert [cycle.type for cycle in campaign.dunning_cycles] == ["automatic", "manual"]
        assert all(isinstance(cycle, DunningCycle) for cycle in campaign.dunning_cycles)
        assert campaign.dunning_cycles[1].total_dunning_days == 45
        assert campaign.related("dunning_cycles") is campaign.dunning_cycles


class TestBulkUpdate:
    def test_assigns_campaign_to_plans(self, campaign_api):
        campaign = DunningCampaign.find("abcdef1234567890")
        plans = [Plan(plan_code="gold"), Plan(plan_code="silver")]

        assert campaign.bulk_update([plan.plan_code for plan in plans]) is True

        request = campaign_api.last
        assert request.method == "PUT"
        body = ElementTree.fromstring(request.content)
        assert body.tag == "dunning_campaign"
        assert body.find("plan_codes").attrib == {"type": "array"}
        assert [code.text for code in body.find("plan_codes")] == ["gold", "silver"]

        for code in ("gold", "silver"):
            assert Plan.find(code).dunning_campaign_id == campaign.id

    def test_campaign_is_refreshed_from_response(self, campaign_api):
        campaign = DunningCampaign.find("abcdef1234567890")

        campaign.bulk_update(["gold"])

        assert campaign.updated_at.month == 6
        assert not campaign.changed

    def test_requires_at_least_one_plan(self, campaign_api):
        campaign = DunningCampaign.find("abcdef1234567890")

        with pytest.raises(ValueError):
            campaign.bulk_update([])

        assert campaign_api.find("PUT", f"{CAMPAIGN}/bulk_update") == []
