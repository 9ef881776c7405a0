"""
Tests for the Money value object.
"""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from domain.exceptions import CurrencyMismatchError, InvalidArgumentError, InvalidOperationError
from domain.value_objects.money import MAX_AMOUNT, Money, to_decimal


class TestMoneyNormalization:
    """Rounding and currency normalization on construction."""

    def test_rounds_half_up_and_uppercases_currency(self):
        money = Money("10.005", "usd")

        assert money.amount == Decimal("10.01")
        assert money.currency == "USD"
        assert str(money) == "10.01 USD"

    def test_float_input_does_not_pick_up_binary_error(self):
        assert Money(10.005, "USD").amount == Decimal("10.01")
        assert Money(0.1 + 0.2, "USD").amount == Decimal("0.30")

    def test_negative_amounts_round_away_from_zero(self):
        assert Money("-2.345", "EUR").amount == Decimal("-2.35")

    def test_integer_amount_gets_two_places(self):
        money = Money(7, "GBP")
        assert money.amount == Decimal("7.00")
        assert str(money) == "7.00 GBP"

    @pytest.mark.parametrize("currency", ["US", "USDX", "   ", "", None])
    def test_rejects_invalid_currency(self, currency):
        with pytest.raises(InvalidArgumentError):
            Money("1", currency)

    @pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity", True, None])
    def test_rejects_non_numeric_amount(self, amount):
        with pytest.raises(InvalidArgumentError):
            Money(amount, "USD")

    def test_to_decimal_names_the_field(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            to_decimal("x", "chest")
        assert "chest" in exc_info.value.message

    def test_largest_amount_is_kept_exactly(self):
        assert Money(MAX_AMOUNT, "USD").amount == Decimal("999999999999.99")
        assert Money("-999999999999.994", "USD").amount == Decimal("-999999999999.99")

    @pytest.mark.parametrize("amount", [
        Decimal("1e27"), Decimal("1e40"), "1000000000000", "999999999999.995", Decimal("-1e30")
    ])
    def test_rejects_amounts_beyond_the_largest(self, amount):
        with pytest.raises(InvalidArgumentError):
            Money(amount, "USD")

    def test_arithmetic_past_the_largest_amount_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Money(MAX_AMOUNT, "USD").add(Money("0.01", "USD"))
        with pytest.raises(InvalidArgumentError):
            Money("1e11", "USD").multiply(10 ** 9)


class TestMoneyBehaviour:
    """Arithmetic, equality and immutability."""

    def test_equality_is_by_value(self):
        assert Money("1.0", "usd") == Money("1.00", "USD")
        assert Money("1.00", "USD") != Money("1.00", "EUR")
        assert hash(Money("5", "USD")) == hash(Money("5.00", "usd"))

    def test_add_and_subtract(self):
        a = Money("10.50", "USD")
        b = Money("0.75", "USD")

        assert a + b == Money("11.25", "USD")
        assert a - b == Money("9.75", "USD")
        assert a.add(b) == a + b

    def test_multiply_by_quantity(self):
        assert Money("19.99", "USD").multiply(3) == Money("59.97", "USD")

    def test_zero(self):
        zero = Money.zero("chf")
        assert zero.is_zero()
        assert zero.currency == "CHF"

    def test_currency_mismatch_always_fails(self):
        usd = Money("1", "USD")
        eur = Money("1", "EUR")

        with pytest.raises(CurrencyMismatchError) as exc_info:
            usd + eur
        with pytest.raises(CurrencyMismatchError):
            usd.subtract(eur)

        assert isinstance(exc_info.value, InvalidOperationError)
        assert exc_info.value.message == "Currency mismatch: USD vs EUR"

    def test_is_immutable(self):
        money = Money("1", "USD")
        with pytest.raises(FrozenInstanceError):
            money.amount = Decimal("2")
