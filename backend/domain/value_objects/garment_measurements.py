"""
GarmentMeasurements Value Object

Optional body measurements attached to a single work order line item.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from domain.exceptions import InvalidArgumentError
from domain.value_objects.money import to_decimal
from domain.value_objects.text import clean_optional_text


@dataclass(frozen=True)
class GarmentMeasurements:
    """Immutable measurement set, compared by value."""

    chest: Decimal
    waist: Decimal
    hips: Decimal
    sleeve: Decimal
    notes: Optional[str] = None

    def __post_init__(self):
        """Validate that no dimension is negative."""
        for name in ("chest", "waist", "hips", "sleeve"):
            value = to_decimal(getattr(self, name), name)
            if value < 0:
                raise InvalidArgumentError(
                    f"{name} cannot be negative",
                    {name: str(value)}
                )
            object.__setattr__(self, name, value)
        object.__setattr__(self, "notes", clean_optional_text(self.notes))

