"""
Work Order Service

Handles business logic for work orders: opening an order, editing its line
items and discount, and moving it through its lifecycle.

Every command loads the order through the repository, checks that it belongs
to the customer in the request, applies one aggregate operation and saves
once. An order owned by another customer is reported as NOT_FOUND so the
route never reveals that it exists.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID
import logging

from constants import WorkOrderSort
from domain.aggregates.work_order import WorkOrder
from domain.exceptions import DomainError
from domain.value_objects.garment_measurements import GarmentMeasurements
from domain.value_objects.money import Money
from domain.value_objects.work_order_status import WorkOrderStatus
from dtos.request.work_order_request import (
    AddWorkOrderItemRequest,
    CreateWorkOrderRequest,
    SetDiscountRequest,
    UpdateItemQuantityRequest,
)
from dtos.response.work_order_response import WorkOrderResponse, WorkOrderSummaryResponse
from exceptions import ValidationError
from services.interfaces import IAppointmentRepository, ICustomerRepository, IWorkOrderRepository
from services.results import CommandResult, PageResult
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)

# One aggregate operation; the bool-returning ones give False when nothing changed
ItemAction = Callable[[WorkOrder], Optional[bool]]


class WorkOrderService:
    """Service for work-order-related business logic."""

    def __init__(
        self,
        work_orders: IWorkOrderRepository,
        customers: ICustomerRepository,
        appointments: IAppointmentRepository,
    ):
        """
        Initialize WorkOrderService.

        Args:
            work_orders: Work order repository
            customers: Customer repository, used to validate the owner
            appointments: Appointment repository, used to validate a linked appointment
        """
        self.work_orders = work_orders
        self.customers = customers
        self.appointments = appointments

    @log_operation("create_work_order")
    def create(self, *, customer_id: UUID, request: CreateWorkOrderRequest) -> CommandResult:
        """
        Open a Draft work order.

        Returns:
            CREATED with the order id, or REJECTED when the customer does not
            exist or the appointment is missing or belongs to someone else
        """
        if not self.customers.exists(customer_id):
            return CommandResult.rejected("Invalid customer or appointment", customer_id=str(customer_id))

        if request.appointment_id is not None:
            appointment = self.appointments.get(request.appointment_id)
            if appointment is None or appointment.customer_id != customer_id:
                return CommandResult.rejected(
                    "Invalid customer or appointment",
                    customer_id=str(customer_id),
                    appointment_id=str(request.appointment_id)
                )

        try:
            work_order = WorkOrder.create(customer_id, request.currency, request.appointment_id)
        except DomainError as e:
            return CommandResult.from_error(e)

        self.work_orders.add(work_order)
        self.work_orders.save()
        logger.info(f"Work order {work_order.id} opened for customer {customer_id} in {work_order.currency}")
        return CommandResult.created(work_order.id)

    @log_operation("add_work_order_item")
    def add_item(
        self,
        *,
        customer_id: UUID,
        work_order_id: UUID,
        request: AddWorkOrderItemRequest,
    ) -> CommandResult:
        def action(order: WorkOrder):
            measurements = None
            if request.measurements is not None:
                m = request.measurements
                measurements = GarmentMeasurements(m.chest, m.waist, m.hips, m.sleeve, m.notes)
            order.add_item(
                request.description,
                request.quantity,
                Money(request.unit_price, request.currency),
                request.garment_type,
                measurements,
            )

        return self._mutate(customer_id, work_order_id, action)

    @log_operation("remove_work_order_item")
    def remove_item(self, *, customer_id: UUID, work_order_id: UUID, description: str) -> CommandResult:
        """Remove a line item; REJECTED when the order is finalized or has no such item."""
        return self._mutate(
            customer_id,
            work_order_id,
            lambda order: order.remove_item(description),
            failure_message=f"Cannot remove item '{description}'",
        )

    @log_operation("update_work_order_item_quantity")
    def update_item_quantity(
        self,
        *,
        customer_id: UUID,
        work_order_id: UUID,
        description: str,
        request: UpdateItemQuantityRequest,
    ) -> CommandResult:
        """
        Change a line item's quantity in place.

        The item keeps its position, price, garment type and measurements, and
        the change is written in a single save.
        """
        return self._mutate(
            customer_id,
            work_order_id,
            lambda order: order.update_item_quantity(description, request.quantity),
            failure_message=f"Cannot change quantity of item '{description}'",
        )

    @log_operation("set_work_order_discount")
    def set_discount(
        self,
        *,
        customer_id: UUID,
        work_order_id: UUID,
        request: SetDiscountRequest,
    ) -> CommandResult:
        return self._mutate(
            customer_id,
            work_order_id,
            lambda order: order.set_discount(Money(request.amount, request.currency)),
        )

    @log_operation("clear_work_order_discount")
    def clear_discount(self, *, customer_id: UUID, work_order_id: UUID) -> CommandResult:
        return self._mutate(customer_id, work_order_id, lambda order: order.clear_discount())

    @log_operation("start_work_order")
    def start(self, *, customer_id: UUID, work_order_id: UUID) -> CommandResult:
        return self._mutate(customer_id, work_order_id, lambda order: order.start())

    @log_operation("complete_work_order")
    def complete(self, *, customer_id: UUID, work_order_id: UUID) -> CommandResult:
        return self._mutate(customer_id, work_order_id, lambda order: order.complete())

    @log_operation("cancel_work_order")
    def cancel(self, *, customer_id: UUID, work_order_id: UUID) -> CommandResult:
        return self._mutate(customer_id, work_order_id, lambda order: order.cancel())

    def get_details(self, customer_id: UUID, work_order_id: UUID) -> Optional[WorkOrderResponse]:
        """Order with items and totals, or None if missing, disabled or owned by another customer."""
        work_order = self.work_orders.get(work_order_id)
        if work_order is None or work_order.customer_id != customer_id:
            return None
        return WorkOrderResponse.from_domain(work_order)

    def get_by_id(self, work_order_id: UUID) -> Optional[WorkOrderResponse]:
        work_order = self.work_orders.get(work_order_id)
        return WorkOrderResponse.from_domain(work_order) if work_order else None

    def get_summary(self, work_order_id: UUID) -> Optional[WorkOrderSummaryResponse]:
        work_order = self.work_orders.get(work_order_id)
        return WorkOrderSummaryResponse.from_domain(work_order) if work_order else None

    def list_for_customer(
        self,
        customer_id: UUID,
        page: int,
        page_size: int,
        sort_by: Optional[str] = None,
        desc: bool = False,
    ) -> PageResult[WorkOrderResponse]:
        """
        Page through one customer's orders.

        Raises:
            ValidationError: If sort_by is not "created" or "status"
        """
        self._validate_sort(sort_by)
        orders, total = self.work_orders.list_for_customer(customer_id, page, page_size, sort_by, desc)
        return PageResult([WorkOrderResponse.from_domain(o) for o in orders], total, page, page_size)

    def list_all(
        self,
        page: int,
        page_size: int,
        sort_by: Optional[str] = None,
        desc: bool = False,
        status: Optional[str] = None,
        customer_id: Optional[UUID] = None,
        from_utc: Optional[datetime] = None,
        to_utc: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> PageResult[WorkOrderSummaryResponse]:
        """
        Page through orders of all customers.

        Raises:
            ValidationError: If sort_by or status is not recognised, or the
                date range is inverted
        """
        self._validate_sort(sort_by)
        status_name = None
        if status:
            try:
                status_name = WorkOrderStatus.from_string(status).value
            except ValueError as e:
                raise ValidationError(str(e), {"status": status})
        if from_utc is not None and to_utc is not None and from_utc > to_utc:
            raise ValidationError("from_utc must not be after to_utc", {"from_utc": str(from_utc)})

        orders, total = self.work_orders.list_all(
            page, page_size, sort_by, desc, status_name, customer_id, from_utc, to_utc, search
        )
        return PageResult(
            [WorkOrderSummaryResponse.from_domain(o) for o in orders], total, page, page_size
        )

    @staticmethod
    def _validate_sort(sort_by: Optional[str]) -> None:
        if sort_by and sort_by.lower() not in WorkOrderSort.ALL:
            raise ValidationError(
                f"Invalid sort field: {sort_by}",
                {"sort_by": f"must be one of {sorted(WorkOrderSort.ALL)}"}
            )

    def _mutate(
        self,
        customer_id: UUID,
        work_order_id: UUID,
        action: ItemAction,
        failure_message: str = "Work order was not changed",
    ) -> CommandResult:
        """
        Load an owned order, apply one operation and save it.

        Operations that report failure by returning False produce a REJECTED
        result with failure_message; domain exceptions produce a REJECTED
        result carrying their own message. Nothing is saved in either case.
        """
        work_order = self.work_orders.get_for_update(work_order_id)
        if work_order is None or work_order.customer_id != customer_id:
            return CommandResult.not_found("Work order not found", work_order_id=str(work_order_id))

        try:
            changed = action(work_order)
        except DomainError as e:
            logger.warning(f"Work order {work_order_id} change rejected: {e.message}")
            return CommandResult.from_error(e)

        if changed is False:
            logger.warning(f"Work order {work_order_id}: {failure_message}")
            return CommandResult.rejected(
                failure_message,
                work_order_id=str(work_order_id),
                status=work_order.status.value
            )

        self.work_orders.save()
        return CommandResult.ok()
