"""
WorkOrder Aggregate

A garment production order for one customer: ordered line items, an optional
discount and a Draft -> InProgress -> Completed lifecycle, with Cancelled
reachable from any state except Completed.

Invariants:
- every item price and the discount share the order currency
- items and discount change only while the order is Draft or InProgress
- item descriptions are unique within the order (case-insensitive)
- every operation validates before mutating, so a failed call leaves the
  order untouched
"""

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from domain.aggregates.work_order_item import WorkOrderItem, description_key
from domain.entities.entity import Entity, require_id
from domain.exceptions import InvalidArgumentError, InvalidOperationError
from domain.value_objects.garment_measurements import GarmentMeasurements
from domain.value_objects.garment_type import GarmentType
from domain.value_objects.money import Money, normalize_currency
from domain.value_objects.work_order_status import WorkOrderStatus


class WorkOrder(Entity):
    """Work order aggregate root."""

    def __init__(
        self,
        customer_id: UUID,
        currency: str,
        appointment_id: Optional[UUID] = None,
        *,
        id: Optional[UUID] = None,
        status: WorkOrderStatus = WorkOrderStatus.DRAFT,
        items: Optional[Iterable[WorkOrderItem]] = None,
        discount: Optional[Money] = None,
        created_date: Optional[datetime] = None,
        enabled: bool = True,
    ):
        super().__init__(id=id, created_date=created_date, enabled=enabled)
        self.customer_id = require_id(customer_id, "customer_id")
        self.currency = normalize_currency(currency)
        self.appointment_id = require_id(appointment_id, "appointment_id") if appointment_id else None
        self._status = WorkOrderStatus(status)
        self._items: List[WorkOrderItem] = []
        for item in items or []:
            self._check_item(item)
            self._items.append(item)
        if discount is not None:
            self._check_currency(discount)
        self._discount = discount if discount is not None and not discount.is_zero() else None

    @classmethod
    def create(
        cls,
        customer_id: UUID,
        currency: str,
        appointment_id: Optional[UUID] = None,
    ) -> "WorkOrder":
        """
        Open a new Draft order for a customer.

        The appointment, when given, must already have been checked to belong
        to the same customer.

        Raises:
            InvalidArgumentError: If customer_id is missing or currency is invalid
        """
        return cls(customer_id, currency, appointment_id)

    @property
    def status(self) -> WorkOrderStatus:
        return self._status

    @property
    def items(self) -> tuple:
        return tuple(self._items)

    @property
    def discount(self) -> Optional[Money]:
        return self._discount

    @property
    def is_finalized(self) -> bool:
        return self._status.is_finalized()

    def find_item(self, description: str) -> Optional[WorkOrderItem]:
        index = self._index_of(description)
        return self._items[index] if index is not None else None

    def subtotal(self) -> Money:
        """Sum of line totals; zero in the order currency when empty."""
        return self._sum_lines(self._items)

    def total(self) -> Money:
        """
        Subtotal minus the discount, with the applied discount capped at the
        subtotal. The stored discount itself is never reduced.
        """
        subtotal = self.subtotal()
        if self._discount is None:
            return subtotal
        applied = self._discount if self._discount.amount <= subtotal.amount else subtotal
        return subtotal.subtract(applied)

    def add_item(
        self,
        description: str,
        quantity: int,
        unit_price: Money,
        garment_type: GarmentType = GarmentType.OTHER,
        measurements: Optional[GarmentMeasurements] = None,
    ) -> WorkOrderItem:
        """
        Append a line item.

        Raises:
            InvalidOperationError: If the order is finalized, the price currency
                differs from the order currency, or the description is taken
            InvalidArgumentError: If the item itself is malformed, or its line
                total or the resulting subtotal is too large to represent
        """
        self._ensure_open("add items")
        item = WorkOrderItem(description, quantity, unit_price, garment_type, measurements)
        self._check_item(item)
        self._sum_lines(self._items + [item])
        self._items.append(item)
        return item

    def remove_item(self, description: str) -> bool:
        """Remove an item by description; False when finalized or not found."""
        if self.is_finalized:
            return False
        index = self._index_of(description)
        if index is None:
            return False
        del self._items[index]
        return True

    def update_item_quantity(self, description: str, quantity: int) -> bool:
        """
        Replace an item's quantity in place, keeping its position, price,
        garment type and measurements.

        Returns False when finalized, not found, quantity is not positive, or
        the new line total or subtotal is too large to represent.
        """
        if self.is_finalized or isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return False
        index = self._index_of(description)
        if index is None:
            return False
        updated = list(self._items)
        updated[index] = updated[index].with_quantity(quantity)
        try:
            self._sum_lines(updated)
        except InvalidArgumentError:
            return False
        self._items = updated
        return True

    def set_discount(self, discount: Money) -> None:
        """
        Set the order discount. A zero amount clears it.

        Raises:
            InvalidOperationError: If finalized or the currency differs
            InvalidArgumentError: If the amount is negative
        """
        self._ensure_open("change the discount")
        self._check_currency(discount)
        if discount.amount < 0:
            raise InvalidArgumentError(
                "Discount cannot be negative",
                {"work_order_id": str(self.id), "discount": str(discount)}
            )
        self._discount = None if discount.is_zero() else discount

    def clear_discount(self) -> None:
        self._ensure_open("change the discount")
        self._discount = None

    def start(self) -> None:
        self._transition(WorkOrderStatus.IN_PROGRESS)

    def complete(self) -> None:
        self._transition(WorkOrderStatus.COMPLETED)

    def cancel(self) -> None:
        self._transition(WorkOrderStatus.CANCELLED)

    def link_appointment(self, appointment_id: UUID) -> None:
        self._ensure_open("link an appointment")
        self.appointment_id = require_id(appointment_id, "appointment_id")

    def _index_of(self, description: str) -> Optional[int]:
        if not isinstance(description, str) or not description.strip():
            return None
        key = description_key(description)
        for index, item in enumerate(self._items):
            if item.key == key:
                return index
        return None

    def _ensure_open(self, action: str) -> None:
        if self.is_finalized:
            raise InvalidOperationError(
                f"Cannot {action} on a {self._status.value} work order",
                {"work_order_id": str(self.id), "status": self._status.value}
            )

    def _check_currency(self, money: Money) -> None:
        if not isinstance(money, Money):
            raise InvalidArgumentError("Expected a Money value", {"value": money})
        if money.currency != self.currency:
            raise InvalidOperationError(
                f"Currency mismatch: order is {self.currency}, got {money.currency}",
                {"work_order_id": str(self.id), "currency": money.currency}
            )

    def _sum_lines(self, items: Iterable[WorkOrderItem]) -> Money:
        """
        Sum the line totals of items in the order currency.

        Raises:
            InvalidArgumentError: If a line total or the sum exceeds the largest amount
        """
        total = Money.zero(self.currency)
        for item in items:
            total = total.add(item.line_total())
        return total

    def _check_item(self, item: WorkOrderItem) -> None:
        self._check_currency(item.unit_price)
        if self._index_of(item.description) is not None:
            raise InvalidOperationError(
                f"An item named '{item.description}' already exists on this work order",
                {"work_order_id": str(self.id), "description": item.description}
            )

    def _transition(self, target: WorkOrderStatus) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidOperationError(
                f"Cannot move work order from {self._status.value} to {target.value}",
                {"work_order_id": str(self.id), "status": self._status.value, "target": target.value}
            )
        self._status = target

    def __repr__(self) -> str:
        return (
            f"WorkOrder(id={self.id}, customer_id={self.customer_id}, "
            f"status={self._status.value}, items={len(self._items)}, total={self.total()})"
        )
