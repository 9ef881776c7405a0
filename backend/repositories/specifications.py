"""
Specification Pattern Implementation

Provides a way to encapsulate query logic in reusable, composable specifications.
This follows the Specification Pattern from Domain-Driven Design.

Each specification can be evaluated in memory against a candidate object or
converted to a SQLAlchemy filter expression, so the same rule drives both
the repository queries and the unit tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, or_, not_

from models import Appointment as AppointmentModel
from .base_repository import to_db_datetime


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """
    Abstract base class for specifications.

    A specification encapsulates a single business rule or query criterion.
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check if a candidate object satisfies this specification.

        Args:
            candidate: Object to check

        Returns:
            True if candidate satisfies specification
        """
        pass

    @abstractmethod
    def to_sql_filter(self):
        """
        Convert specification to SQLAlchemy filter expression.

        Returns:
            SQLAlchemy filter expression
        """
        pass

    def __and__(self, other: "Specification[T]") -> "AndSpecification[T]":
        """Combine specifications with AND."""
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "OrSpecification[T]":
        """Combine specifications with OR."""
        return OrSpecification(self, other)

    def __invert__(self) -> "NotSpecification[T]":
        """Negate specification with NOT."""
        return NotSpecification(self)


class AndSpecification(Specification[T]):
    """Specification that combines two specifications with AND."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if candidate satisfies both specifications."""
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        """Convert to SQL AND filter."""
        return and_(self.left.to_sql_filter(), self.right.to_sql_filter())


class OrSpecification(Specification[T]):
    """Specification that combines two specifications with OR."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if candidate satisfies either specification."""
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        """Convert to SQL OR filter."""
        return or_(self.left.to_sql_filter(), self.right.to_sql_filter())


class NotSpecification(Specification[T]):
    """Specification that negates another specification."""

    def __init__(self, spec: Specification[T]):
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if candidate does NOT satisfy specification."""
        return not self.spec.is_satisfied_by(candidate)

    def to_sql_filter(self):
        """Convert to SQL NOT filter."""
        return not_(self.spec.to_sql_filter())


# Appointment specifications
#
# Candidates may be ORM rows (string ids, naive UTC datetimes) or domain
# Appointments (UUIDs, aware datetimes); values are normalized before comparing.

def _status_name(status) -> str:
    return getattr(status, "value", status)


class AppointmentsForCustomerSpec(Specification[AppointmentModel]):
    """Appointments belonging to one customer."""

    def __init__(self, customer_id: UUID | str):
        self.customer_id = str(customer_id)

    def is_satisfied_by(self, appointment) -> bool:
        return str(appointment.customer_id) == self.customer_id

    def to_sql_filter(self):
        return AppointmentModel.customer_id == self.customer_id


class AppointmentsByStatusSpec(Specification[AppointmentModel]):
    """Appointments in a given status (Scheduled, Completed, Cancelled)."""

    def __init__(self, status: str):
        self.status = _status_name(status)

    def is_satisfied_by(self, appointment) -> bool:
        return _status_name(appointment.status) == self.status

    def to_sql_filter(self):
        return AppointmentModel.status == self.status


class AppointmentOverlapsWindowSpec(Specification[AppointmentModel]):
    """
    Appointments whose [start, end) window overlaps [start, end).

    Overlap: existing.start < end AND start < existing.end
    """

    def __init__(self, start: datetime, end: datetime):
        self.start = to_db_datetime(start)
        self.end = to_db_datetime(end)

    def is_satisfied_by(self, appointment) -> bool:
        existing_start = to_db_datetime(appointment.start_utc)
        existing_end = to_db_datetime(appointment.end_utc)
        return existing_start < self.end and self.start < existing_end

    def to_sql_filter(self):
        return and_(AppointmentModel.start_utc < self.end, AppointmentModel.end_utc > self.start)


class AppointmentIdSpec(Specification[AppointmentModel]):
    """A single appointment by id; negate it to exclude one appointment."""

    def __init__(self, appointment_id: UUID | str):
        self.appointment_id = str(appointment_id)

    def is_satisfied_by(self, appointment) -> bool:
        return str(appointment.id) == self.appointment_id

    def to_sql_filter(self):
        return AppointmentModel.id == self.appointment_id


def conflicting_appointments_spec(
    customer_id: UUID | str,
    start: datetime,
    end: datetime,
    exclude_id: UUID | str | None = None,
) -> Specification[AppointmentModel]:
    """
    Scheduled appointments of the customer that overlap [start, end),
    optionally ignoring the appointment being rescheduled.
    """
    spec = (
        AppointmentsForCustomerSpec(customer_id)
        & AppointmentsByStatusSpec("Scheduled")
        & AppointmentOverlapsWindowSpec(start, end)
    )
    if exclude_id is not None:
        spec = spec & ~AppointmentIdSpec(exclude_id)
    return spec
