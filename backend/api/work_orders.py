"""
Work Order API endpoints

Customer-scoped routes edit a single order; the /workorders routes serve the
shop-wide order list and lookups by id.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response

from constants import HTTPStatus
from dependencies import Paging, get_paging, get_work_order_service
from dtos.request.work_order_request import (
    AddWorkOrderItemRequest,
    CreateWorkOrderRequest,
    SetDiscountRequest,
    UpdateItemQuantityRequest,
)
from dtos.response.common import CreatedResponse, PageResponse
from dtos.response.work_order_response import WorkOrderResponse, WorkOrderSummaryResponse
from services.work_order_service import WorkOrderService
from utils.error_handlers import handle_api_errors, raise_for_result

router = APIRouter()

CUSTOMER_ORDERS = "/customers/{customer_id}/workorders"


@router.post(CUSTOMER_ORDERS, response_model=CreatedResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create work order")
def create_work_order(
    customer_id: UUID,
    request: CreateWorkOrderRequest,
    service: WorkOrderService = Depends(get_work_order_service)
):
    """
    Open a Draft work order.

    Returns 400 when the customer is unknown or the appointment does not
    belong to the customer.
    """
    result = raise_for_result(service.create(customer_id=customer_id, request=request))
    return CreatedResponse(id=result.value)


@router.get(CUSTOMER_ORDERS, response_model=List[WorkOrderResponse])
@handle_api_errors("List customer work orders")
def list_customer_work_orders(
    customer_id: UUID,
    response: Response,
    paging: Paging = Depends(get_paging),
    sort_by: Optional[str] = None,
    desc: bool = False,
    service: WorkOrderService = Depends(get_work_order_service)
):
    """
    List a customer's work orders.

    The total number of orders is returned in the X-Total-Count header.

    Args:
        sort_by: created (default) or status
        desc: Sort descending
    """
    page = service.list_for_customer(customer_id, paging.page, paging.page_size, sort_by, desc)
    response.headers["X-Total-Count"] = str(page.total)
    return page.items


@router.get(CUSTOMER_ORDERS + "/{work_order_id}", response_model=WorkOrderResponse)
@handle_api_errors("Get work order")
def get_work_order(
    customer_id: UUID,
    work_order_id: UUID,
    service: WorkOrderService = Depends(get_work_order_service)
):
    details = service.get_details(customer_id, work_order_id)
    if details is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Work order not found")
    return details


@router.post(CUSTOMER_ORDERS + "/{work_order_id}/items", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Add work order item")
def add_item(
    customer_id: UUID,
    work_order_id: UUID,
    request: AddWorkOrderItemRequest,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.add_item(
        customer_id=customer_id, work_order_id=work_order_id, request=request
    ))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.put(CUSTOMER_ORDERS + "/{work_order_id}/items/{description}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Update item quantity")
def update_item_quantity(
    customer_id: UUID,
    work_order_id: UUID,
    description: str,
    request: UpdateItemQuantityRequest,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.update_item_quantity(
        customer_id=customer_id,
        work_order_id=work_order_id,
        description=description,
        request=request
    ))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete(CUSTOMER_ORDERS + "/{work_order_id}/items/{description}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Remove work order item")
def remove_item(
    customer_id: UUID,
    work_order_id: UUID,
    description: str,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.remove_item(
        customer_id=customer_id, work_order_id=work_order_id, description=description
    ))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post(CUSTOMER_ORDERS + "/{work_order_id}/start", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Start work order")
def start_work_order(
    customer_id: UUID,
    work_order_id: UUID,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.start(customer_id=customer_id, work_order_id=work_order_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post(CUSTOMER_ORDERS + "/{work_order_id}/complete", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Complete work order")
def complete_work_order(
    customer_id: UUID,
    work_order_id: UUID,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.complete(customer_id=customer_id, work_order_id=work_order_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete(CUSTOMER_ORDERS + "/{work_order_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Cancel work order")
def cancel_work_order(
    customer_id: UUID,
    work_order_id: UUID,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.cancel(customer_id=customer_id, work_order_id=work_order_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post(CUSTOMER_ORDERS + "/{work_order_id}/discount", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Set work order discount")
def set_discount(
    customer_id: UUID,
    work_order_id: UUID,
    request: SetDiscountRequest,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.set_discount(
        customer_id=customer_id, work_order_id=work_order_id, request=request
    ))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete(CUSTOMER_ORDERS + "/{work_order_id}/discount", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Clear work order discount")
def clear_discount(
    customer_id: UUID,
    work_order_id: UUID,
    service: WorkOrderService = Depends(get_work_order_service)
):
    raise_for_result(service.clear_discount(customer_id=customer_id, work_order_id=work_order_id))
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/workorders", response_model=PageResponse[WorkOrderSummaryResponse])
@handle_api_errors("List work orders")
def list_work_orders(
    paging: Paging = Depends(get_paging),
    sort_by: Optional[str] = None,
    desc: bool = False,
    status: Optional[str] = None,
    customer_id: Optional[UUID] = None,
    from_utc: Optional[datetime] = None,
    to_utc: Optional[datetime] = None,
    search: Optional[str] = None,
    service: WorkOrderService = Depends(get_work_order_service)
):
    """
    List work orders across all customers.

    Args:
        sort_by: created (default) or status
        desc: Sort descending
        status: Draft, InProgress, Completed or Cancelled
        customer_id: Restrict to one customer
        from_utc: Created at or after
        to_utc: Created at or before
        search: Matches the order id or any item description
    """
    page = service.list_all(
        paging.page, paging.page_size, sort_by, desc, status, customer_id, from_utc, to_utc, search
    )
    return PageResponse[WorkOrderSummaryResponse].from_page(page)


@router.get("/workorders/{work_order_id}", response_model=WorkOrderResponse)
@handle_api_errors("Get work order by id")
def get_work_order_by_id(
    work_order_id: UUID,
    service: WorkOrderService = Depends(get_work_order_service)
):
    details = service.get_by_id(work_order_id)
    if details is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Work order not found")
    return details


@router.get("/workorders/{work_order_id}/summary", response_model=WorkOrderSummaryResponse)
@handle_api_errors("Get work order summary")
def get_work_order_summary(
    work_order_id: UUID,
    service: WorkOrderService = Depends(get_work_order_service)
):
    summary = service.get_summary(work_order_id)
    if summary is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Work order not found")
    return summary
