"""
Subscription lifecycle actions.
"""

from __future__ import annotations

from datetime import datetime, timezone
from xml.etree import ElementTree

import pytest

from recurly_v2.resources import Plan, Subscription, SubscriptionAddOn, Usage

UUID = "44f83d7cba354d5b84812419f923ea96"
SUB = f"subscriptions/{UUID}"


@pytest.fixture
def subscription(api) -> Subscription:
    api.add("GET", SUB, "subscriptions/show-200.xml")
    return Subscription.find(UUID)


class TestLoad:
    def test_nested_plan_and_links(self, subscription):
        assert isinstance(subscription.plan, Plan)
        assert subscription.plan.plan_code == "gold"
        assert subscription.plan.uri == "https://api.recurly.com/v2/plans/gold"
        assert subscription.account is None
        assert subscription.links["account"].href.endswith("/accounts/abcdef1234567890")
        assert set(subscription.links) >= {"cancel", "terminate", "postpone", "pause"}

    def test_add_ons(self, subscription):
        (add_on,) = subscription.subscription_add_ons

        assert isinstance(add_on, SubscriptionAddOn)
        assert add_on.add_on_code == "extra_users"
        assert add_on.quantity == 2

    def test_has_one_account_is_fetched(self, api, subscription):
        api.add("GET", "accounts/abcdef1234567890", "accounts/show-200.xml")

        account = subscription.related("account")

        assert account.account_code == "abcdef1234567890"


class TestActions:
    def test_cancel_follows_anchor(self, api, subscription):
        api.add("PUT", f"{SUB}/cancel", "subscriptions/cancel-200.xml")

        assert subscription.cancel() is True

        assert api.last.method == "PUT"
        assert api.last.url.path == f"/v2/{SUB}/cancel"
        assert "timeframe" not in api.last.url.params
        assert subscription.state == "canceled"
        assert "cancel" not in subscription.links
        assert "reactivate" in subscription.links

    def test_cancel_with_timeframe(self, api, subscription):
        api.add("PUT", f"{SUB}/cancel", "subscriptions/cancel-200.xml")

        subscription.cancel(timeframe="term_end")

        assert api.last.url.params["timeframe"] == "term_end"

    def test_reactivate_after_cancel(self, api, subscription):
        api.add("PUT", f"{SUB}/cancel", "subscriptions/cancel-200.xml")
        api.add("PUT", f"{SUB}/reactivate", "subscriptions/show-200.xml")

        subscription.cancel()
        subscription.reactivate()

        assert subscription.state == "active"
        assert api.last.url.path == f"/v2/{SUB}/reactivate"

    @pytest.mark.parametrize("refund", ["none", "partial", "full"])
    def test_terminate_with_refund(self, api, subscription, refund):
        api.add("PUT", f"{SUB}/terminate", "subscriptions/terminate-200.xml")

        assert subscription.terminate(refund) is True

        assert api.last.url.params["refund"] == refund
        assert subscription.state == "expired"
        assert set(subscription.links) == {"account", "invoice"}

    def test_terminate_rejects_unknown_refund(self, api, subscription):
        with pytest.raises(ValueError, match="refund must be one of"):
            subscription.terminate("some")

        assert api.find("PUT", f"{SUB}/terminate") == []

    def test_postpone(self, api, subscription):
        api.add("PUT", f"{SUB}/postpone", "subscriptions/show-200.xml")

        subscription.postpone(datetime(2012, 1, 1, tzinfo=timezone.utc), bulk=True)

        params = api.last.url.params
        assert params["next_renewal_date"] == "2012-01-01T00:00:00+00:00"
        assert params["bulk"] == "true"

    def test_pause_sends_cycles(self, api, subscription):
        api.add("PUT", f"{SUB}/pause", "subscriptions/pause-200.xml")

        subscription.pause(2)

        body = ElementTree.fromstring(api.last.content)
        assert body.tag == "subscription"
        assert body.find("remaining_pause_cycles").text == "2"
        assert subscription.remaining_pause_cycles == 2

    def test_pause_rejects_negative_cycles(self, subscription):
        with pytest.raises(ValueError):
            subscription.pause(-1)

    def test_resume_without_anchor_uses_member_path(self, api, subscription):
        api.add("PUT", f"{SUB}/resume", "subscriptions/show-200.xml")

        subscription.resume()

        assert api.last.url.path == f"/v2/{SUB}/resume"


class TestUsage:
    def test_record_usage(self, api, subscription):
        api.add(
            "POST",
            f"{SUB}/add_ons/extra_users/usage",
            body=b"<usage><id type=\"integer\">394729</id><amount type=\"integer\">100</amount></usage>",
            status=201,
        )
        usage = Usage(amount=100, merchant_tag="Order ID: 4939853977878713")

        assert subscription.record_usage("extra_users", usage) is True

        assert usage.id == 394729
        assert usage.persisted
        body = ElementTree.fromstring(api.last.content)
        assert body.tag == "usage"
        assert body.find("amount").text == "100"

    def test_list_usages(self, api, subscription):
        api.add(
            "GET",
            f"{SUB}/add_ons/extra_users/usage",
            body=b'<usages type="array"><usage><id type="integer">1</id></usage></usages>',
        )

        assert [u.id for u in subscription.usages("extra_users")] == [1]
