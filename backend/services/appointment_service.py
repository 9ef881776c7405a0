"""
Appointment Service

Handles scheduling, rescheduling, completing and cancelling appointments.
Every command checks that the appointment belongs to the customer in the
request, and scheduling or rescheduling into a window that overlaps another
Scheduled appointment of the same customer is refused with a CONFLICT result.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID
import logging

from domain.entities.appointment import Appointment
from domain.exceptions import DomainError
from domain.value_objects.appointment_status import AppointmentStatus
from dtos.request.appointment_request import (
    RescheduleAppointmentRequest,
    ScheduleAppointmentRequest,
    UpdateAppointmentNotesRequest,
)
from dtos.response.appointment_response import AppointmentResponse
from exceptions import ValidationError
from services.interfaces import IAppointmentRepository, ICustomerRepository
from services.results import CommandResult, PageResult
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service for appointment-related business logic."""

    def __init__(self, appointments: IAppointmentRepository, customers: ICustomerRepository):
        """
        Initialize AppointmentService.

        Args:
            appointments: Appointment repository (also owns conflict checks)
            customers: Customer repository, used to validate the owner
        """
        self.appointments = appointments
        self.customers = customers

    @log_operation("schedule_appointment")
    def schedule(self, *, customer_id: UUID, request: ScheduleAppointmentRequest) -> CommandResult:
        """
        Book a new appointment.

        Returns:
            CREATED with the appointment id, REJECTED for an unknown customer or
            invalid window, CONFLICT when the window overlaps another Scheduled
            appointment of the customer
        """
        if not self.customers.exists(customer_id):
            return CommandResult.rejected("Invalid customer", customer_id=str(customer_id))
        try:
            appointment = Appointment(customer_id, request.start_utc, request.end_utc, request.notes)
        except DomainError as e:
            return CommandResult.from_error(e)

        if self.appointments.has_conflict(customer_id, appointment.start_utc, appointment.end_utc):
            logger.info(
                f"Appointment conflict for customer {customer_id}: "
                f"{appointment.start_utc.isoformat()} - {appointment.end_utc.isoformat()}"
            )
            return CommandResult.conflict(
                "The appointment overlaps another scheduled appointment",
                customer_id=str(customer_id)
            )

        self.appointments.add(appointment)
        self.appointments.save()
        return CommandResult.created(appointment.id)

    @log_operation("reschedule_appointment")
    def reschedule(
        self,
        *,
        customer_id: UUID,
        appointment_id: UUID,
        request: RescheduleAppointmentRequest,
    ) -> CommandResult:
        appointment = self._load_owned(customer_id, appointment_id)
        if appointment is None:
            return self._not_found(appointment_id)

        if appointment.status == AppointmentStatus.SCHEDULED and self.appointments.has_conflict(
            customer_id, request.start_utc, request.end_utc, exclude_id=appointment.id
        ):
            return CommandResult.conflict(
                "The new time overlaps another scheduled appointment",
                appointment_id=str(appointment_id)
            )
        return self._apply(appointment, lambda a: a.reschedule(request.start_utc, request.end_utc))

    @log_operation("complete_appointment")
    def complete(self, *, customer_id: UUID, appointment_id: UUID) -> CommandResult:
        return self._mutate(customer_id, appointment_id, lambda a: a.complete())

    @log_operation("cancel_appointment")
    def cancel(self, *, customer_id: UUID, appointment_id: UUID) -> CommandResult:
        return self._mutate(customer_id, appointment_id, lambda a: a.cancel())

    @log_operation("update_appointment_notes")
    def update_notes(
        self,
        *,
        customer_id: UUID,
        appointment_id: UUID,
        request: UpdateAppointmentNotesRequest,
    ) -> CommandResult:
        return self._mutate(customer_id, appointment_id, lambda a: a.update_notes(request.notes))

    def list_for_customer(
        self,
        customer_id: UUID,
        from_utc: Optional[datetime],
        to_utc: Optional[datetime],
        page: int,
        page_size: int,
    ) -> PageResult[AppointmentResponse]:
        """Customer's appointments ordered by start time, earliest first."""
        appointments, total = self.appointments.list_for_customer(
            customer_id, from_utc, to_utc, page, page_size
        )
        return PageResult(
            [AppointmentResponse.from_domain(a) for a in appointments], total, page, page_size
        )

    def list_appointments(
        self,
        customer_id: Optional[UUID],
        status: Optional[str],
        page: int,
        page_size: int,
    ) -> PageResult[AppointmentResponse]:
        """
        All appointments ordered by start time, latest first.

        Raises:
            ValidationError: If status is not a known appointment status or "all"
        """
        status_name = None
        if status and status.strip().lower() != "all":
            try:
                status_name = AppointmentStatus.from_string(status).value
            except ValueError as e:
                raise ValidationError(str(e), {"status": status})

        appointments, total = self.appointments.list_appointments(
            customer_id, status_name, page, page_size
        )
        return PageResult(
            [AppointmentResponse.from_domain(a) for a in appointments], total, page, page_size
        )

    def _load_owned(self, customer_id: UUID, appointment_id: UUID) -> Optional[Appointment]:
        appointment = self.appointments.get_for_update(appointment_id)
        if appointment is None or appointment.customer_id != customer_id:
            return None
        return appointment

    @staticmethod
    def _not_found(appointment_id: UUID) -> CommandResult:
        return CommandResult.not_found("Appointment not found", appointment_id=str(appointment_id))

    def _mutate(
        self,
        customer_id: UUID,
        appointment_id: UUID,
        action: Callable[[Appointment], None],
    ) -> CommandResult:
        appointment = self._load_owned(customer_id, appointment_id)
        if appointment is None:
            return self._not_found(appointment_id)
        return self._apply(appointment, action)

    def _apply(self, appointment: Appointment, action: Callable[[Appointment], None]) -> CommandResult:
        try:
            action(appointment)
        except DomainError as e:
            logger.warning(f"Appointment {appointment.id} change rejected: {e.message}")
            return CommandResult.from_error(e)
        self.appointments.save()
        return CommandResult.ok()
