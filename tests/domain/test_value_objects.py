"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from rater.domain.exceptions import ValidationError
from rater.domain.model.value_objects import Money, round_half_up, to_decimal


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(1050)
        assert m.amount == 1050
        assert m.currency == "CAD"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an int"):
            Money(10.5)

    def test_addition(self):
        assert Money(1000) + Money(550) == Money(1550)

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(1000, "CAD") + Money(500, "USD")

    def test_str_formatting(self):
        assert str(Money(1500)) == "$15.00"
        assert str(Money(905)) == "$9.05"

    def test_comparison_operators(self):
        assert Money(5) < Money(10)
        assert Money(10) > Money(5)
        assert Money(10) >= Money(10)
        assert Money(10) <= Money(10)


# ── Rounding & coercion ──────────────────────────────────────────────────────


class TestRoundHalfUp:

    def test_halves_round_up(self):
        assert round_half_up(Decimal("142.5")) == 143
        assert round_half_up(Decimal("2.5")) == 3

    def test_below_half_rounds_down(self):
        assert round_half_up(Decimal("544.2")) == 544

    def test_amounts_wider_than_default_precision(self):
        assert round_half_up(Decimal("1E+40")) == 10**40
        assert round_half_up(Decimal("123456789012345678901234567890.5")) == 123456789012345678901234567891


class TestToDecimal:

    def test_numbers_and_strings(self):
        assert to_decimal(5) == Decimal("5")
        assert to_decimal("12.5") == Decimal("12.5")
        assert to_decimal(0.1) == Decimal("0.1")

    def test_unusable_values(self):
        assert to_decimal(None) is None
        assert to_decimal("heavy") is None
        assert to_decimal(True) is None
        assert to_decimal("NaN") is None
