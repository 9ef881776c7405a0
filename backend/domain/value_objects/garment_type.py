"""
GarmentType Value Object

Kind of garment a work order line item describes.
"""

from enum import Enum


class GarmentType(str, Enum):
    """Garment kinds offered by the shop."""

    SUIT = "Suit"
    JACKET = "Jacket"
    PANT = "Pant"
    VEST = "Vest"
    SHIRT = "Shirt"
    TOP = "Top"
    DRESS = "Dress"
    SKIRT = "Skirt"
    COAT = "Coat"
    OTHER = "Other"

    @classmethod
    def from_string(cls, value: str) -> "GarmentType":
        """
        Create GarmentType from a case-insensitive name.

        Raises:
            ValueError: If value is not a known garment type
        """
        if isinstance(value, GarmentType):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Invalid garment type: {value}")
