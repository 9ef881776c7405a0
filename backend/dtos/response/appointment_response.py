"""
Appointment Response DTOs
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.entities.appointment import Appointment


class AppointmentResponse(BaseModel):
    """Response DTO for an appointment."""

    id: UUID = Field(description="Appointment ID")
    customer_id: UUID = Field(description="Owning customer")
    start_utc: datetime = Field(description="Start (UTC)")
    end_utc: datetime = Field(description="End (UTC)")
    status: str = Field(description="Scheduled, Completed or Cancelled")
    notes: Optional[str] = Field(None, description="Free-text notes")

    @classmethod
    def from_domain(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            customer_id=appointment.customer_id,
            start_utc=appointment.start_utc,
            end_utc=appointment.end_utc,
            status=appointment.status.value,
            notes=appointment.notes,
        )
