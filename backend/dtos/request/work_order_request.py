"""
Work Order Request DTOs

DTOs for work-order-related API requests. Field validation here is the
first line of defence; the domain aggregate re-checks every rule.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from constants import FieldLimits
from domain.value_objects.garment_type import GarmentType
from domain.value_objects.money import MAX_AMOUNT


def _validate_currency(v: str) -> str:
    if len(v) != FieldLimits.CURRENCY or not v.strip():
        raise ValueError("must be a 3-letter currency code")
    return v


class CreateWorkOrderRequest(BaseModel):
    """Request DTO for opening a work order."""

    currency: str = Field(description="ISO currency code, e.g. USD")
    appointment_id: Optional[UUID] = Field(None, description="Appointment of the same customer to link")

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return _validate_currency(v)

    model_config = {
        "json_schema_extra": {
            "example": {"currency": "USD", "appointment_id": None}
        }
    }


class GarmentMeasurementsRequest(BaseModel):
    """Optional measurements for a single garment."""

    chest: Decimal = Field(ge=0, description="Chest")
    waist: Decimal = Field(ge=0, description="Waist")
    hips: Decimal = Field(ge=0, description="Hips")
    sleeve: Decimal = Field(ge=0, description="Sleeve length")
    notes: Optional[str] = Field(None, max_length=FieldLimits.MEASUREMENT_NOTES, description="Fitting notes")


class AddWorkOrderItemRequest(BaseModel):
    """Request DTO for adding a line item."""

    description: str = Field(
        min_length=1,
        max_length=FieldLimits.ITEM_DESCRIPTION,
        description="Item description, unique within the order"
    )
    quantity: int = Field(gt=0, le=FieldLimits.ITEM_QUANTITY, description="Number of pieces")
    unit_price: Decimal = Field(ge=0, le=MAX_AMOUNT, description="Price per piece")
    currency: str = Field(description="Currency of unit_price; must match the order")
    garment_type: GarmentType = Field(GarmentType.OTHER, description="Kind of garment")
    measurements: Optional[GarmentMeasurementsRequest] = Field(None, description="Garment measurements")

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return _validate_currency(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("garment_type", mode="before")
    @classmethod
    def parse_garment_type(cls, v):
        """Accept garment names in any case."""
        if isinstance(v, str):
            return GarmentType.from_string(v)
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "description": "Navy two-piece suit",
                "quantity": 1,
                "unit_price": "450.00",
                "currency": "USD",
                "garment_type": "Suit",
                "measurements": {"chest": 100, "waist": 84, "hips": 98, "sleeve": 64}
            }
        }
    }


class UpdateItemQuantityRequest(BaseModel):
    """Request DTO for changing a line item's quantity."""

    quantity: int = Field(gt=0, le=FieldLimits.ITEM_QUANTITY, description="New number of pieces")


class SetDiscountRequest(BaseModel):
    """Request DTO for setting the order discount; 0 clears it."""

    amount: Decimal = Field(ge=0, le=MAX_AMOUNT, description="Discount amount")
    currency: str = Field(description="Currency; must match the order")

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return _validate_currency(v)
