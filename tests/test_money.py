"""
Tests for multi-currency amounts.
"""

from __future__ import annotations

import pydantic
import pytest

from recurly_v2.core import config
from recurly_v2.core.domain.money import Money
from recurly_v2.resources import Plan


class TestMoney:
    def test_from_mapping(self):
        money = Money({"USD": 7900, "EUR": 6900})

        assert money["USD"] == 7900
        assert "EUR" in money
        assert "GBP" not in money
        assert money.currencies == ["USD", "EUR"]
        assert len(money) == 2

    def test_integer_uses_default_currency(self):
        assert Money(500).root == {"USD": 500}

        with config.scoped_config(default_currency="EUR"):
            assert Money(500).root == {"EUR": 500}

    def test_amount_shortcut(self):
        assert Money(1200).amount() == 1200
        assert Money({"USD": 1, "EUR": 2}).amount("EUR") == 2

    def test_amount_is_ambiguous_with_several_currencies(self):
        with pytest.raises(ValueError, match="pass one of"):
            Money({"USD": 1, "EUR": 2}).amount()

    def test_item_assignment(self):
        money = Money({"USD": 1})
        money["EUR"] = 99
        del money["USD"]

        assert money.root == {"EUR": 99}

    def test_rejects_booleans(self):
        with pytest.raises(pydantic.ValidationError, match="must be integers"):
            Money(True)

    def test_boolean_field_value_is_a_validation_error(self):
        with pytest.raises(pydantic.ValidationError, match="unit_amount_in_cents"):
            Plan(plan_code="gold", unit_amount_in_cents=True)


class TestMoneyFields:
    def test_plan_amount_from_integer(self):
        plan = Plan(plan_code="gold", unit_amount_in_cents=7900)

        assert isinstance(plan.unit_amount_in_cents, Money)
        assert plan.unit_amount_in_cents["USD"] == 7900

    def test_plan_payload_nests_currencies(self):
        plan = Plan(plan_code="gold", unit_amount_in_cents={"USD": 7900, "EUR": 6900})

        assert plan.to_payload()["unit_amount_in_cents"] == {"USD": 7900, "EUR": 6900}

    def test_assignment_is_coerced(self):
        plan = Plan(plan_code="gold")
        plan.setup_fee_in_cents = 6000

        assert plan.setup_fee_in_cents.root == {"USD": 6000}
        assert "setup_fee_in_cents" in plan.changed_attributes
