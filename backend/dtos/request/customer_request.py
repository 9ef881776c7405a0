"""
Customer Request DTOs

DTOs for customer-related API requests.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from constants import FieldLimits


class CustomerDetailsRequest(BaseModel):
    """
    Fields shared by registration and update.
    """

    first_name: str = Field(min_length=1, max_length=FieldLimits.NAME, description="First name")
    last_name: str = Field(min_length=1, max_length=FieldLimits.NAME, description="Last name")
    date_of_birth: Optional[date] = Field(None, description="Date of birth")
    email: str = Field(min_length=1, max_length=FieldLimits.EMAIL, description="Email address")
    phone: Optional[str] = Field(None, max_length=FieldLimits.PHONE, description="Phone number")
    address: Optional[str] = Field(None, max_length=FieldLimits.ADDRESS, description="Postal address")
    fit_preference: Optional[str] = Field(None, max_length=FieldLimits.PREFERENCE, description="Preferred fit")
    style_preference: Optional[str] = Field(None, max_length=FieldLimits.PREFERENCE, description="Preferred style")
    fabric_preference: Optional[str] = Field(None, max_length=FieldLimits.PREFERENCE, description="Preferred fabric")

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require something that looks like an address."""
        if "@" not in v or not v.strip():
            raise ValueError("must be a valid email address")
        return v


class RegisterCustomerRequest(CustomerDetailsRequest):
    """
    Request DTO for registering a new customer.
    """

    customer_number: str = Field(
        min_length=1,
        max_length=FieldLimits.CUSTOMER_NUMBER,
        description="Shop-assigned customer number, unique"
    )

    @field_validator("customer_number")
    @classmethod
    def validate_customer_number(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "customer_number": "C-1001",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@example.com",
                "phone": "+44 20 7946 0000",
                "fit_preference": "Slim",
                "style_preference": "Classic",
                "fabric_preference": "Wool"
            }
        }
    }


class UpdateCustomerRequest(CustomerDetailsRequest):
    """Request DTO for replacing a customer's details."""


class AddMeasurementRequest(BaseModel):
    """Request DTO for recording body measurements."""

    date: datetime = Field(description="When the measurements were taken")
    chest: Decimal = Field(ge=0, description="Chest")
    waist: Decimal = Field(ge=0, description="Waist")
    hips: Decimal = Field(ge=0, description="Hips")
    sleeve: Decimal = Field(ge=0, description="Sleeve length")


class AddNoteRequest(BaseModel):
    """Request DTO for attaching a note to a customer."""

    text: str = Field(min_length=1, max_length=FieldLimits.NOTE_TEXT, description="Note text")
    author: Optional[str] = Field(None, max_length=FieldLimits.NOTE_AUTHOR, description="Who wrote the note")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v
