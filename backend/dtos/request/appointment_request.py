"""
Appointment Request DTOs

DTOs for appointment-related API requests.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from constants import FieldLimits
from domain.value_objects.time_window import ensure_utc


class AppointmentWindowRequest(BaseModel):
    """
    Request DTO carrying a [start_utc, end_utc) window.

    Naive datetimes are interpreted as UTC.
    """

    start_utc: datetime = Field(description="Start of the appointment (UTC)")
    end_utc: datetime = Field(description="End of the appointment (UTC), after start_utc")

    @model_validator(mode="after")
    def validate_window(self):
        """Ensure the window is not empty or inverted."""
        if ensure_utc(self.end_utc) <= ensure_utc(self.start_utc):
            raise ValueError("end_utc must be after start_utc")
        return self


class ScheduleAppointmentRequest(AppointmentWindowRequest):
    """Request DTO for booking a new appointment."""

    notes: Optional[str] = Field(None, max_length=FieldLimits.APPOINTMENT_NOTES, description="Free-text notes")

    model_config = {
        "json_schema_extra": {
            "example": {
                "start_utc": "2025-03-01T10:00:00Z",
                "end_utc": "2025-03-01T11:00:00Z",
                "notes": "First fitting"
            }
        }
    }


class RescheduleAppointmentRequest(AppointmentWindowRequest):
    """Request DTO for moving an appointment."""


class UpdateAppointmentNotesRequest(BaseModel):
    """Request DTO for replacing an appointment's notes; blank clears them."""

    notes: Optional[str] = Field(None, max_length=FieldLimits.APPOINTMENT_NOTES, description="Free-text notes")
