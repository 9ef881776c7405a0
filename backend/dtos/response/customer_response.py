"""
Customer Response DTOs

DTOs for customer-related API responses.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.entities.customer import Customer, CustomerNote, MeasurementRecord
from .common import Amount


class CustomerSummaryResponse(BaseModel):
    """
    Response DTO for a customer row in list views.
    """

    id: UUID = Field(description="Customer ID")
    customer_number: str = Field(description="Shop-assigned customer number")
    first_name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    email: str = Field(description="Email address")
    registration_date: datetime = Field(description="Registration timestamp (UTC)")
    enabled: bool = Field(description="False when soft-deleted")

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerSummaryResponse":
        return cls(
            id=customer.id,
            customer_number=customer.customer_number,
            first_name=customer.personal_info.first_name,
            last_name=customer.personal_info.last_name,
            email=customer.contact_info.email,
            registration_date=customer.registration_date,
            enabled=customer.enabled,
        )


class MeasurementResponse(BaseModel):
    date: datetime = Field(description="When the measurements were taken")
    chest: Amount
    waist: Amount
    hips: Amount
    sleeve: Amount

    @classmethod
    def from_domain(cls, record: MeasurementRecord) -> "MeasurementResponse":
        return cls(
            date=record.date,
            chest=record.chest,
            waist=record.waist,
            hips=record.hips,
            sleeve=record.sleeve,
        )


class NoteResponse(BaseModel):
    date: datetime = Field(description="When the note was written")
    text: str = Field(description="Note text")
    author: Optional[str] = Field(None, description="Author")

    @classmethod
    def from_domain(cls, note: CustomerNote) -> "NoteResponse":
        return cls(date=note.date, text=note.text, author=note.author)


class CustomerDetailsResponse(CustomerSummaryResponse):
    """
    Response DTO for the customer detail view.

    Measurements and notes are ordered newest first.
    """

    date_of_birth: Optional[date] = Field(None, description="Date of birth")
    phone: str = Field("", description="Phone number")
    address: str = Field("", description="Postal address")
    fit_preference: str = Field("", description="Preferred fit")
    style_preference: str = Field("", description="Preferred style")
    fabric_preference: Optional[str] = Field(None, description="Preferred fabric")
    status: str = Field(description="Active or VIP")
    total_spent: Amount = Field(description="Lifetime spend")
    measurements: List[MeasurementResponse] = Field(default_factory=list)
    notes: List[NoteResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerDetailsResponse":
        summary = CustomerSummaryResponse.from_domain(customer)
        return cls(
            **summary.model_dump(),
            date_of_birth=customer.personal_info.date_of_birth,
            phone=customer.contact_info.phone,
            address=customer.contact_info.address,
            fit_preference=customer.preferences.fit,
            style_preference=customer.preferences.style,
            fabric_preference=customer.preferences.notes,
            status=customer.status.value,
            total_spent=customer.total_spent,
            measurements=[
                MeasurementResponse.from_domain(m)
                for m in sorted(customer.measurement_history, key=lambda m: m.date, reverse=True)
            ],
            notes=[
                NoteResponse.from_domain(n)
                for n in sorted(customer.notes, key=lambda n: n.date, reverse=True)
            ],
        )
