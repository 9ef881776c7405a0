"""
Appointment Entity

A fitting or consultation slot booked for one customer.

Conflict detection against the customer's other appointments belongs to the
appointment repository; callers check for conflicts before scheduling or
rescheduling.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from domain.entities.entity import Entity, require_id
from domain.exceptions import InvalidOperationError
from domain.value_objects.appointment_status import AppointmentStatus
from domain.value_objects.text import clean_optional_text
from domain.value_objects.time_window import TimeWindow


class Appointment(Entity):
    """
    Appointment with a Scheduled -> Completed | Cancelled state machine.

    Raises InvalidArgumentError for a window whose end is not after its start
    and InvalidOperationError for transitions the current status forbids.
    """

    def __init__(
        self,
        customer_id: UUID,
        start_utc: datetime,
        end_utc: datetime,
        notes: Optional[str] = None,
        *,
        id: Optional[UUID] = None,
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        created_date: Optional[datetime] = None,
        enabled: bool = True,
    ):
        super().__init__(id=id, created_date=created_date, enabled=enabled)
        self.customer_id = require_id(customer_id, "customer_id")
        self._window = TimeWindow(start_utc, end_utc)
        self._status = AppointmentStatus(status)
        self.notes = clean_optional_text(notes)

    @property
    def start_utc(self) -> datetime:
        return self._window.start

    @property
    def end_utc(self) -> datetime:
        return self._window.end

    @property
    def window(self) -> TimeWindow:
        return self._window

    @property
    def status(self) -> AppointmentStatus:
        return self._status

    def reschedule(self, new_start: datetime, new_end: datetime) -> None:
        if self._status != AppointmentStatus.SCHEDULED:
            raise InvalidOperationError(
                f"Only scheduled appointments can be rescheduled (status: {self._status.value})",
                {"appointment_id": str(self.id), "status": self._status.value}
            )
        self._window = TimeWindow(new_start, new_end)

    def complete(self) -> None:
        self._transition(AppointmentStatus.COMPLETED)

    def cancel(self) -> None:
        self._transition(AppointmentStatus.CANCELLED)

    def update_notes(self, notes: Optional[str]) -> None:
        self.notes = clean_optional_text(notes)

    def overlaps(self, start_utc: datetime, end_utc: datetime) -> bool:
        """Check if this appointment's window overlaps [start_utc, end_utc)."""
        return self._window.overlaps(TimeWindow(start_utc, end_utc))

    def _transition(self, target: AppointmentStatus) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidOperationError(
                f"Cannot move appointment from {self._status.value} to {target.value}",
                {"appointment_id": str(self.id), "status": self._status.value, "target": target.value}
            )
        self._status = target

    def __repr__(self) -> str:
        return (
            f"Appointment(id={self.id}, customer_id={self.customer_id}, "
            f"start={self.start_utc.isoformat()}, end={self.end_utc.isoformat()}, "
            f"status={self._status.value})"
        )
