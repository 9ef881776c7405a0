"""
Appointment API endpoints

Booking and lifecycle routes are nested under the owning customer; the
global list serves the shop calendar.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from constants import HTTPStatus
from dependencies import Paging, get_appointment_paging, get_appointment_service
from dtos.request.appointment_request import (
    RescheduleAppointmentRequest,
    ScheduleAppointmentRequest,
    UpdateAppointmentNotesRequest,
)
from dtos.response.appointment_response import AppointmentResponse
from dtos.response.common import CreatedResponse, PageResponse
from services.appointment_service import AppointmentService
from utils.error_handlers import handle_api_errors, raise_for_result

router = APIRouter()


@router.post(
    "/customers/{customer_id}/appointments",
    response_model=CreatedResponse,
    status_code=HTTPStatus.CREATED
)
@handle_api_errors("Schedule appointment")
def schedule_appointment(
    customer_id: UUID,
    request: ScheduleAppointmentRequest,
    service: AppointmentService = Depends(get_appointment_service)
):
    """
    Book an appointment for a customer.

    Returns 400 for an unknown customer and 409 when the window overlaps
    another scheduled appointment of the same customer.
    """
    result = raise_for_result(service.schedule(customer_id=customer_id, request=request))
    return CreatedResponse(id=result.value)


@router.get(
    "/customers/{customer_id}/appointments",
    response_model=PageResponse[AppointmentResponse]
)
@handle_api_errors("List customer appointments")
def list_customer_appointments(
    customer_id: UUID,
    from_utc: Optional[datetime] = None,
    to_utc: Optional[datetime] = None,
    paging: Paging = Depends(get_appointment_paging),
    service: AppointmentService = Depends(get_appointment_service)
):
    """
    List a customer's appointments, earliest first.

    Args:
        from_utc: Only appointments starting at or after this time
        to_utc: Only appointments ending at or before this time
    """
    page = service.list_for_customer(customer_id, from_utc, to_utc, paging.page, paging.page_size)
    return PageResponse[AppointmentResponse].from_page(page)


@router.put("/customers/{customer_id}/appointments/{appointment_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Reschedule appointment")
def reschedule_appointment(
    customer_id: UUID,
    appointment_id: UUID,
    request: RescheduleAppointmentRequest,
    service: AppointmentService = Depends(get_appointment_service)
):
    raise_for_result(service.reschedule(
        customer_id=customer_id, appointment_id=appointment_id, request=request
    ))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/customers/{customer_id}/appointments/{appointment_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Cancel appointment")
def cancel_appointment(
    customer_id: UUID,
    appointment_id: UUID,
    service: AppointmentService = Depends(get_appointment_service)
):
    raise_for_result(service.cancel(customer_id=customer_id, appointment_id=appointment_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post(
    "/customers/{customer_id}/appointments/{appointment_id}/complete",
    status_code=HTTPStatus.NO_CONTENT
)
@handle_api_errors("Complete appointment")
def complete_appointment(
    customer_id: UUID,
    appointment_id: UUID,
    service: AppointmentService = Depends(get_appointment_service)
):
    raise_for_result(service.complete(customer_id=customer_id, appointment_id=appointment_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.patch(
    "/customers/{customer_id}/appointments/{appointment_id}/notes",
    status_code=HTTPStatus.NO_CONTENT
)
@handle_api_errors("Update appointment notes")
def update_appointment_notes(
    customer_id: UUID,
    appointment_id: UUID,
    request: UpdateAppointmentNotesRequest,
    service: AppointmentService = Depends(get_appointment_service)
):
    raise_for_result(service.update_notes(
        customer_id=customer_id, appointment_id=appointment_id, request=request
    ))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/appointments", response_model=PageResponse[AppointmentResponse])
@handle_api_errors("List appointments")
def list_appointments(
    customer_id: Optional[UUID] = None,
    status: Optional[str] = None,
    paging: Paging = Depends(get_appointment_paging),
    service: AppointmentService = Depends(get_appointment_service)
):
    """
    List appointments across customers, latest start first.

    Args:
        customer_id: Restrict to one customer
        status: Scheduled, Completed, Cancelled or all
    """
    page = service.list_appointments(customer_id, status, paging.page, paging.page_size)
    return PageResponse[AppointmentResponse].from_page(page)
