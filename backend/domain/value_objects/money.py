"""
Money Value Object

Immutable amount and currency pair. Amounts are always held at two decimal
places, rounded half away from zero, and currencies are upper-case ISO codes.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

from domain.exceptions import CurrencyMismatchError, InvalidArgumentError

TWO_PLACES = Decimal("0.01")
HALF_CENT = Decimal("0.005")

# Largest amount held exactly by a Numeric(18, 2) column and by a JSON number
MAX_AMOUNT = Decimal("999999999999.99")

AmountLike = Union[Decimal, int, float, str]


def to_decimal(value: AmountLike, field: str = "amount") -> Decimal:
    """
    Convert a numeric input to Decimal without binary float artifacts.

    Floats go through str() so 10.005 stays 10.005 instead of 10.00499...

    Raises:
        InvalidArgumentError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field} must be a number", {field: value})
    try:
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgumentError(f"{field} must be a number", {field: value})
    if not result.is_finite():
        raise InvalidArgumentError(f"{field} must be a finite number", {field: str(value)})
    return result


def round_amount(value: Decimal) -> Decimal:
    """
    Round to two decimal places, half away from zero.

    Raises:
        InvalidArgumentError: If the rounded amount is beyond MAX_AMOUNT
    """
    # Anything from here up rounds past MAX_AMOUNT; quantize itself fails beyond 28 digits
    if value.copy_abs() >= MAX_AMOUNT + HALF_CENT:
        raise InvalidArgumentError(
            f"Amount must not exceed {MAX_AMOUNT}",
            {"amount": str(value)}
        )
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def normalize_currency(currency: str) -> str:
    """
    Validate and upper-case a currency code.

    Raises:
        InvalidArgumentError: If the code is blank or not exactly 3 characters
    """
    if not isinstance(currency, str) or not currency.strip() or len(currency) != 3:
        raise InvalidArgumentError(
            "Currency must be a 3-letter code",
            {"currency": currency}
        )
    return currency.upper()


@dataclass(frozen=True)
class Money:
    """
    Immutable money value object.

    Equality is exact on amount and currency. Arithmetic returns new instances
    and refuses to mix currencies.
    """

    amount: Decimal
    currency: str

    def __post_init__(self):
        """Normalize amount and currency."""
        object.__setattr__(self, "currency", normalize_currency(self.currency))
        object.__setattr__(self, "amount", round_amount(to_decimal(self.amount)))

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Create 0.00 in the given currency."""
        return cls(Decimal("0"), currency)

    def _ensure_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot combine Money and {type(other)}")
        if self.currency.upper() != other.currency.upper():
            raise CurrencyMismatchError(self.currency, other.currency)

    def add(self, other: "Money") -> "Money":
        """Return the sum of two amounts in the same currency."""
        self._ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Return the difference of two amounts in the same currency."""
        self._ensure_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: int) -> "Money":
        """Scale the amount by an integer factor (e.g. a quantity)."""
        return Money(self.amount * factor, self.currency)

    def is_zero(self) -> bool:
        return self.amount == 0

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"
