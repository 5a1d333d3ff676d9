"""
Push notification parsing.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from recurly_v2.adapters.webhook import InvalidNotificationError, Notification, parse_notification
from recurly_v2.resources import Account, Transaction

FIXTURE = Path(__file__).parent / "fixtures" / "webhooks" / "successful_payment_notification.xml"


class TestParse:
    def test_successful_payment(self):
        notification = parse_notification(FIXTURE.read_bytes())

        assert isinstance(notification, Notification)
        assert notification.type == "successful_payment"
        assert notification.name == "successful_payment_notification"

        assert isinstance(notification.account, Account)
        assert notification.account.account_code == "1"
        assert notification.account.username is None
        assert notification.account.persisted

        assert isinstance(notification.transaction, Transaction)
        assert notification.transaction.amount_in_cents == 1000
        assert notification.transaction.status == "success"
        assert notification.subscription is None
        # Fields without a model attribute stay available.
        assert notification.raw["transaction"]["invoice_number"] == 2059

    def test_text_body(self):
        notification = parse_notification(
            "<new_account_notification><account><account_code>a1</account_code></account></new_account_notification>"
        )

        assert notification.type == "new_account"
        assert notification.account.account_code == "a1"

    def test_notification_without_resources(self):
        notification = parse_notification("<test_notification></test_notification>")

        assert notification.type == "test"
        assert notification.account is None


class TestInvalid:
    def test_not_xml(self):
        with pytest.raises(InvalidNotificationError, match="not valid XML"):
            parse_notification(b"{}")

    def test_unexpected_root(self):
        with pytest.raises(InvalidNotificationError, match="unexpected notification root"):
            parse_notification(b"<account><account_code>a1</account_code></account>")

    def test_empty_body(self):
        with pytest.raises(InvalidNotificationError):
            parse_notification(b"")
