"""
Work Order Response DTOs

DTOs for work-order-related API responses. Money is flattened into an
amount plus currency field, and the discount is reported as 0 when none
is set.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.aggregates.work_order import WorkOrder
from domain.aggregates.work_order_item import WorkOrderItem
from .common import Amount


class WorkOrderItemResponse(BaseModel):
    """Response DTO for one line item."""

    description: str = Field(description="Item description")
    quantity: int = Field(description="Number of pieces")
    unit_price: Amount = Field(description="Price per piece")
    currency: str = Field(description="Currency of unit_price")
    line_total: Amount = Field(description="unit_price x quantity")
    garment_type: str = Field(description="Kind of garment")
    chest: Optional[Amount] = None
    waist: Optional[Amount] = None
    hips: Optional[Amount] = None
    sleeve: Optional[Amount] = None
    measurement_notes: Optional[str] = None

    @classmethod
    def from_domain(cls, item: WorkOrderItem) -> "WorkOrderItemResponse":
        m = item.measurements
        return cls(
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price.amount,
            currency=item.unit_price.currency,
            line_total=item.line_total().amount,
            garment_type=item.garment_type.value,
            chest=m.chest if m else None,
            waist=m.waist if m else None,
            hips=m.hips if m else None,
            sleeve=m.sleeve if m else None,
            measurement_notes=m.notes if m else None,
        )


class WorkOrderSummaryResponse(BaseModel):
    """
    Response DTO for a work order row in list views.
    """

    id: UUID = Field(description="Work order ID")
    customer_id: UUID = Field(description="Owning customer")
    appointment_id: Optional[UUID] = Field(None, description="Linked appointment")
    currency: str = Field(description="Order currency")
    status: str = Field(description="Draft, InProgress, Completed or Cancelled")
    created_date: datetime = Field(description="Creation timestamp (UTC)")
    subtotal: Amount = Field(description="Sum of line totals")
    discount: Amount = Field(description="Stored discount, 0 when none")
    total: Amount = Field(description="Subtotal minus discount, never below 0")

    @classmethod
    def from_domain(cls, order: WorkOrder) -> "WorkOrderSummaryResponse":
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            appointment_id=order.appointment_id,
            currency=order.currency,
            status=order.status.value,
            created_date=order.created_date,
            subtotal=order.subtotal().amount,
            discount=order.discount.amount if order.discount else Decimal("0"),
            total=order.total().amount,
        )


class WorkOrderResponse(WorkOrderSummaryResponse):
    """
    Response DTO for the work order detail view.
    """

    items: List[WorkOrderItemResponse] = Field(default_factory=list, description="Line items in order")
    subtotal_currency: str = Field(description="Currency of subtotal")
    total_currency: str = Field(description="Currency of total")

    @classmethod
    def from_domain(cls, order: WorkOrder) -> "WorkOrderResponse":
        summary = WorkOrderSummaryResponse.from_domain(order)
        return cls(
            **summary.model_dump(),
            items=[WorkOrderItemResponse.from_domain(item) for item in order.items],
            subtotal_currency=order.subtotal().currency,
            total_currency=order.total().currency,
        )
