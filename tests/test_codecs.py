"""
Tests for the XML and JSON wire codecs.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from xml.etree import ElementTree

import pytest

from recurly_v2.adapters.codecs import get_codec, singularize
from recurly_v2.adapters.codecs.json_codec import JSONCodec
from recurly_v2.adapters.codecs.xml_codec import XMLCodec
from recurly_v2.core.domain.models import HREF_KEY, Link
from recurly_v2.core.errors import ConfigurationError


class TestSingularize:
    @pytest.mark.parametrize(
        ("plural", "singular"),
        [
            ("add_ons", "add_on"),
            ("currencies", "currency"),
            ("addresses", "address"),
            ("taxes", "tax"),
            ("plan_codes", "plan_code"),
            ("address", "address"),
        ],
    )
    def test_singularize(self, plural, singular):
        assert singularize(plural) == singular


class TestGetCodec:
    def test_known_formats(self):
        assert isinstance(get_codec("xml"), XMLCodec)
        assert isinstance(get_codec("json"), JSONCodec)

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError):
            get_codec("yaml")


class TestXMLDecode:
    codec = XMLCodec()

    def test_typed_scalars(self):
        tag, value = self.codec.decode(
            b"""<plan>
              <plan_code>gold</plan_code>
              <plan_interval_length type="integer">1</plan_interval_length>
              <tax_exempt type="boolean">false</tax_exempt>
              <tax_rate type="decimal">0.0875</tax_rate>
              <created_at type="datetime">2011-10-25T12:00:00Z</created_at>
              <description nil="nil"></description>
              <total_billing_cycles type="integer"></total_billing_cycles>
            </plan>"""
        )

        assert tag == "plan"
        assert value == {
            "plan_code": "gold",
            "plan_interval_length": 1,
            "tax_exempt": False,
            "tax_rate": Decimal("0.0875"),
            "created_at": "2011-10-25T12:00:00Z",
            "description": None,
            "total_billing_cycles": None,
        }

    def test_links_and_actions(self):
        _, value = self.codec.decode(
            b"""<subscription href="https://api.recurly.com/v2/subscriptions/abc">
              <account href="https://api.recurly.com/v2/accounts/1"/>
              <plan href="https://api.recurly.com/v2/plans/gold"><plan_code>gold</plan_code></plan>
              <uuid>abc</uuid>
              <a name="cancel" href="https://api.recurly.com/v2/subscriptions/abc/cancel" method="put"/>
            </subscription>"""
        )

        assert value[HREF_KEY] == "https://api.recurly.com/v2/subscriptions/abc"
        assert value["account"] == Link(href="https://api.recurly.com/v2/accounts/1")
        assert value["plan"] == {HREF_KEY: "https://api.recurly.com/v2/plans/gold", "plan_code": "gold"}
        assert value["cancel"] == Link(href="https://api.recurly.com/v2/subscriptions/abc/cancel", method="PUT")

    def test_arrays(self):
        _, value = self.codec.decode(
            b"""<coupon>
              <plan_codes type="array"><plan_code>gold</plan_code><plan_code>silver</plan_code></plan_codes>
              <empty type="array"></empty>
              <untyped><add_on><code>a</code></add_on><add_on><code>b</code></add_on></untyped>
            </coupon>"""
        )

        assert value["plan_codes"] == ["gold", "silver"]
        assert value["empty"] == []
        # Repeated children that are not the singular of the parent stay a dict.
        assert value["untyped"] == {"add_on": {"code": "b"}}

    def test_repeated_singular_children_are_a_list(self):
        _, value = self.codec.decode(
            b"<accounts><account><account_code>a</account_code></account>"
            b"<account><account_code>b</account_code></account></accounts>"
        )

        assert value == [{"account_code": "a"}, {"account_code": "b"}]

    def test_single_singular_child_is_a_list(self):
        _, one = self.codec.decode(b"<coupon><plan_codes><plan_code>gold</plan_code></plan_codes></coupon>")
        _, two = self.codec.decode(
            b"<coupon><plan_codes><plan_code>gold</plan_code><plan_code>silver</plan_code></plan_codes></coupon>"
        )

        assert one["plan_codes"] == ["gold"]
        assert two["plan_codes"] == ["gold", "silver"]

    def test_singular_container_with_same_tag_child_stays_a_dict(self):
        _, value = self.codec.decode(
            b"<tier><currency><currency>USD</currency><unit_amount_in_cents>100</unit_amount_in_cents></currency></tier>"
        )

        assert value["currency"] == {"currency": "USD", "unit_amount_in_cents": "100"}

    def test_empty_body(self):
        assert self.codec.decode(b"") == (None, None)
        assert self.codec.decode(b"  \n") == (None, None)


class TestXMLEncode:
    codec = XMLCodec()

    def _parse(self, body: bytes) -> ElementTree.Element:
        assert body.startswith(b"<?xml")
        return ElementTree.fromstring(body)

    def test_scalars(self):
        root = self._parse(
            self.codec.encode(
                "account",
                {
                    "account_code": "abc",
                    "tax_exempt": True,
                    "net_terms": 30,
                    "vat_number": None,
                    "created_at": datetime(2011, 10, 25, 12, 0, tzinfo=timezone.utc),
                },
            )
        )

        assert root.tag == "account"
        assert root.find("account_code").text == "abc"
        assert root.find("tax_exempt").attrib == {"type": "boolean"}
        assert root.find("tax_exempt").text == "true"
        assert root.find("net_terms").attrib == {"type": "integer"}
        assert root.find("vat_number").attrib == {"nil": "nil"}
        assert root.find("created_at").text == "2011-10-25T12:00:00Z"

    def test_money_and_arrays(self):
        root = self._parse(
            self.codec.encode(
                "plan",
                {"unit_amount_in_cents": {"USD": 7900, "EUR": 6900}, "plan_codes": ["gold", "silver"]},
            )
        )

        money = root.find("unit_amount_in_cents")
        assert [(child.tag, child.text) for child in money] == [("USD", "7900"), ("EUR", "6900")]
        codes = root.find("plan_codes")
        assert codes.attrib == {"type": "array"}
        assert [child.tag for child in codes] == ["plan_code", "plan_code"]

    def test_nested_href_becomes_attribute(self):
        root = self._parse(self.codec.encode("subscription", {"plan": {HREF_KEY: "https://x/plans/gold", "plan_code": "gold"}}))

        assert root.find("plan").attrib == {"href": "https://x/plans/gold"}


class TestXMLErrors:
    codec = XMLCodec()

    def test_field_errors_accumulate(self):
        details = self.codec.decode_errors(
            b"""<errors>
              <error field="account.account_code" symbol="blank">can't be blank</error>
              <error field="account.account_code" symbol="invalid">is invalid</error>
              <error field="account.email" symbol="invalid_email">is not a valid email</error>
            </errors>"""
        )

        assert details.field_errors == {
            "account.account_code": ["can't be blank", "is invalid"],
            "account.email": ["is not a valid email"],
        }

    def test_single_error(self):
        details = self.codec.decode_errors(
            b"<error><symbol>not_found</symbol><description>Couldn't find it</description>"
            b"<details>check the code</details></error>"
        )

        assert (details.symbol, details.description, details.details) == ("not_found", "Couldn't find it", "check the code")

    def test_transaction_error(self):
        details = self.codec.decode_errors(
            b"""<errors>
              <transaction_error>
                <error_code>declined</error_code>
                <customer_message>The transaction was declined.</customer_message>
              </transaction_error>
              <error field="transaction.account.base" symbol="declined">was declined</error>
            </errors>"""
        )

        assert details.transaction_error == {
            "error_code": "declined",
            "customer_message": "The transaction was declined.",
        }
        assert details.field_errors == {"transaction.account.base": ["was declined"]}


class TestJSONCodec:
    codec = JSONCodec()

    def test_encode_wraps_under_nodename(self):
        body = self.codec.encode("account", {"account_code": "abc", "address": {"city": "SF"}})

        assert json.loads(body) == {"account": {"account_code": "abc", "address": {"city": "SF"}}}

    def test_decode_unwraps_and_maps_links(self):
        tag, value = self.codec.decode(
            json.dumps(
                {
                    "account": {
                        "href": "https://api.recurly.com/v2/accounts/abc",
                        "account_code": "abc",
                        "invoices": {"href": "https://api.recurly.com/v2/accounts/abc/invoices"},
                    }
                }
            ).encode()
        )

        assert tag == "account"
        assert value[HREF_KEY] == "https://api.recurly.com/v2/accounts/abc"
        assert value["invoices"] == Link(href="https://api.recurly.com/v2/accounts/abc/invoices")

    def test_decode_collection(self):
        tag, value = self.codec.decode(b'{"accounts": [{"account_code": "a"}, {"account_code": "b"}]}')

        assert tag == "accounts"
        assert [item["account_code"] for item in value] == ["a", "b"]

    def test_errors(self):
        details = self.codec.decode_errors(
            b'{"errors": [{"field": "account.account_code", "symbol": "blank", "message": "can\'t be blank"}]}'
        )
        single = self.codec.decode_errors(b'{"error": {"symbol": "not_found", "description": "missing"}}')

        assert details.field_errors == {"account.account_code": ["can't be blank"]}
        assert (single.symbol, single.description) == ("not_found", "missing")
