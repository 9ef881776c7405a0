"""
WorkOrderItem Value Object

One line of a work order. Within its order an item is identified by its
description, compared case-insensitively.
"""

from dataclasses import dataclass, replace
from typing import Optional

from domain.exceptions import InvalidArgumentError
from domain.value_objects.garment_measurements import GarmentMeasurements
from domain.value_objects.garment_type import GarmentType
from domain.value_objects.money import Money
from domain.value_objects.text import require_text


def description_key(description: str) -> str:
    """Case-insensitive identity of an item within its order."""
    return description.strip().lower()


@dataclass(frozen=True)
class WorkOrderItem:
    """Immutable line item; equality is structural over all fields."""

    description: str
    quantity: int
    unit_price: Money
    garment_type: GarmentType = GarmentType.OTHER
    measurements: Optional[GarmentMeasurements] = None

    def __post_init__(self):
        """Validate description, quantity and price."""
        object.__setattr__(self, "description", require_text(self.description, "description"))
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise InvalidArgumentError(
                "Quantity must be a positive integer",
                {"quantity": self.quantity}
            )
        if not isinstance(self.unit_price, Money):
            raise InvalidArgumentError("Unit price must be Money", {"unit_price": self.unit_price})
        try:
            object.__setattr__(self, "garment_type", GarmentType.from_string(self.garment_type))
        except ValueError as e:
            raise InvalidArgumentError(str(e), {"garment_type": self.garment_type})

    @property
    def key(self) -> str:
        return description_key(self.description)

    @property
    def currency(self) -> str:
        return self.unit_price.currency

    def line_total(self) -> Money:
        """unit_price.amount x quantity, in the unit price's currency."""
        return self.unit_price.multiply(self.quantity)

    def with_quantity(self, quantity: int) -> "WorkOrderItem":
        """Copy of this item with a different quantity."""
        return replace(self, quantity=quantity)
