"""
Appointment repository for appointment-specific data access operations.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from domain.entities.appointment import Appointment
from domain.value_objects.appointment_status import AppointmentStatus
from models import Appointment as AppointmentModel
from services.interfaces import IAppointmentRepository
from .base_repository import BaseRepository, from_db_datetime, to_db_datetime
from .specifications import (
    AppointmentsByStatusSpec,
    AppointmentsForCustomerSpec,
    conflicting_appointments_spec,
)


class AppointmentRepository(BaseRepository[AppointmentModel, Appointment], IAppointmentRepository):
    """Repository for Appointment persistence and conflict checks."""

    def __init__(self, db: Session):
        super().__init__(db, AppointmentModel)

    def to_domain(self, row: AppointmentModel) -> Appointment:
        return Appointment(
            UUID(row.customer_id),
            from_db_datetime(row.start_utc),
            from_db_datetime(row.end_utc),
            row.notes,
            id=UUID(row.id),
            status=AppointmentStatus(row.status),
            created_date=from_db_datetime(row.created_date),
            enabled=row.enabled,
        )

    def apply(self, appointment: Appointment, row: AppointmentModel) -> None:
        row.customer_id = str(appointment.customer_id)
        row.start_utc = to_db_datetime(appointment.start_utc)
        row.end_utc = to_db_datetime(appointment.end_utc)
        row.notes = appointment.notes
        row.status = appointment.status.value
        row.created_date = to_db_datetime(appointment.created_date)
        row.enabled = appointment.enabled

    def has_conflict(
        self,
        customer_id: UUID,
        start_utc: datetime,
        end_utc: datetime,
        exclude_id: Optional[UUID] = None,
    ) -> bool:
        """
        Check whether [start_utc, end_utc) overlaps another Scheduled
        appointment of the same customer.

        Returns:
            True if a conflicting appointment exists
        """
        spec = conflicting_appointments_spec(customer_id, start_utc, end_utc, exclude_id)
        return self.db.query(AppointmentModel.id).filter(
            AppointmentModel.enabled.is_(True),
            spec.to_sql_filter()
        ).first() is not None

    def list_for_customer(
        self,
        customer_id: UUID,
        from_utc: Optional[datetime],
        to_utc: Optional[datetime],
        page: int,
        page_size: int,
    ) -> Tuple[List[Appointment], int]:
        """
        Customer's appointments ordered by start, ascending.

        Args:
            from_utc: Only appointments starting at or after this time
            to_utc: Only appointments ending at or before this time
        """
        query = self.db.query(AppointmentModel).filter(
            AppointmentModel.enabled.is_(True),
            AppointmentsForCustomerSpec(customer_id).to_sql_filter()
        )
        if from_utc is not None:
            query = query.filter(AppointmentModel.start_utc >= to_db_datetime(from_utc))
        if to_utc is not None:
            query = query.filter(AppointmentModel.end_utc <= to_db_datetime(to_utc))
        query = query.order_by(AppointmentModel.start_utc.asc())

        rows, total = self.paginate(query, page, page_size)
        return [self.to_domain(row) for row in rows], total

    def list_appointments(
        self,
        customer_id: Optional[UUID],
        status: Optional[str],
        page: int,
        page_size: int,
    ) -> Tuple[List[Appointment], int]:
        """
        All appointments ordered by start, newest first.

        Args:
            customer_id: Restrict to one customer
            status: Restrict to one status; None or "all" for every status
        """
        query = self.db.query(AppointmentModel).filter(AppointmentModel.enabled.is_(True))
        if customer_id is not None:
            query = query.filter(AppointmentsForCustomerSpec(customer_id).to_sql_filter())
        if status and status.lower() != "all":
            query = query.filter(AppointmentsByStatusSpec(status).to_sql_filter())
        query = query.order_by(AppointmentModel.start_utc.desc())

        rows, total = self.paginate(query, page, page_size)
        return [self.to_domain(row) for row in rows], total
