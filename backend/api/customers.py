"""
Customer API endpoints
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from constants import HTTPStatus, RecordStatusFilter
from dependencies import Paging, get_customer_service, get_paging
from dtos.request.customer_request import (
    AddMeasurementRequest,
    AddNoteRequest,
    RegisterCustomerRequest,
    UpdateCustomerRequest,
)
from dtos.response.common import CreatedResponse, PageResponse
from dtos.response.customer_response import CustomerDetailsResponse, CustomerSummaryResponse
from services.customer_service import CustomerService
from utils.error_handlers import handle_api_errors, raise_for_result

router = APIRouter()


@router.post("", response_model=CreatedResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Register customer")
def register_customer(
    request: RegisterCustomerRequest,
    service: CustomerService = Depends(get_customer_service)
):
    """
    Register a new customer.

    Returns 409 when the customer number is already in use.
    """
    result = raise_for_result(service.register(request=request))
    return CreatedResponse(id=result.value)


@router.get("", response_model=PageResponse[CustomerSummaryResponse])
@handle_api_errors("List customers")
def list_customers(
    paging: Paging = Depends(get_paging),
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_dir: str = "desc",
    status: str = Query(RecordStatusFilter.ENABLED, description="enabled, disabled or all"),
    service: CustomerService = Depends(get_customer_service)
):
    """
    List customers, newest registration first by default.

    Args:
        search: Case-insensitive match on name, email or customer number
        sort_by: firstname, lastname, email, customernumber, created or registrationdate
        sort_dir: asc or desc
        status: enabled, disabled or all
    """
    page = service.list_customers(paging.page, paging.page_size, search, sort_by, sort_dir, status)
    return PageResponse[CustomerSummaryResponse].from_page(page)


@router.get("/{customer_id}", response_model=CustomerDetailsResponse)
@handle_api_errors("Get customer")
def get_customer(customer_id: UUID, service: CustomerService = Depends(get_customer_service)):
    details = service.get_details(customer_id)
    if details is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Customer not found")
    return details


@router.put("/{customer_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Update customer")
def update_customer(
    customer_id: UUID,
    request: UpdateCustomerRequest,
    service: CustomerService = Depends(get_customer_service)
):
    raise_for_result(service.update(customer_id=customer_id, request=request))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{customer_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Delete customer")
def delete_customer(customer_id: UUID, service: CustomerService = Depends(get_customer_service)):
    """Soft-delete a customer."""
    raise_for_result(service.delete(customer_id=customer_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/{customer_id}/restore", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Restore customer")
def restore_customer(customer_id: UUID, service: CustomerService = Depends(get_customer_service)):
    raise_for_result(service.restore(customer_id=customer_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/{customer_id}/measurements", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Add measurement")
def add_measurement(
    customer_id: UUID,
    request: AddMeasurementRequest,
    service: CustomerService = Depends(get_customer_service)
):
    raise_for_result(service.add_measurement(customer_id=customer_id, request=request))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/{customer_id}/notes", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Add customer note")
def add_note(
    customer_id: UUID,
    request: AddNoteRequest,
    service: CustomerService = Depends(get_customer_service)
):
    raise_for_result(service.add_note(customer_id=customer_id, request=request))
    return Response(status_code=HTTPStatus.NO_CONTENT)
