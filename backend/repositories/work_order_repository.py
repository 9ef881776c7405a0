"""
Work order repository for work-order-specific data access operations.

Items are written back by matching rows on their lower-cased description, so
a quantity change updates the existing row in place and a save never
re-creates untouched lines.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from constants import WorkOrderSort
from domain.aggregates.work_order import WorkOrder
from domain.aggregates.work_order_item import WorkOrderItem
from domain.value_objects.garment_measurements import GarmentMeasurements
from domain.value_objects.garment_type import GarmentType
from domain.value_objects.money import Money
from domain.value_objects.work_order_status import WorkOrderStatus
from models import WorkOrder as WorkOrderModel, WorkOrderItem as WorkOrderItemModel
from services.interfaces import IWorkOrderRepository
from .base_repository import BaseRepository, from_db_datetime, to_db_datetime, to_db_id


def _item_to_domain(row: WorkOrderItemModel) -> WorkOrderItem:
    measurements = None
    if row.chest is not None:
        measurements = GarmentMeasurements(
            row.chest, row.waist, row.hips, row.sleeve, row.measurement_notes
        )
    return WorkOrderItem(
        row.description,
        row.quantity,
        Money(row.unit_price, row.currency),
        GarmentType.from_string(row.garment_type),
        measurements,
    )


def _apply_item(item: WorkOrderItem, row: WorkOrderItemModel, position: int) -> None:
    row.position = position
    row.description = item.description
    row.description_key = item.key
    row.quantity = item.quantity
    row.unit_price = item.unit_price.amount
    row.currency = item.unit_price.currency
    row.garment_type = item.garment_type.value
    m = item.measurements
    row.chest = m.chest if m else None
    row.waist = m.waist if m else None
    row.hips = m.hips if m else None
    row.sleeve = m.sleeve if m else None
    row.measurement_notes = m.notes if m else None


class WorkOrderRepository(BaseRepository[WorkOrderModel, WorkOrder], IWorkOrderRepository):
    """Repository for the WorkOrder aggregate."""

    def __init__(self, db: Session):
        super().__init__(db, WorkOrderModel)

    def to_domain(self, row: WorkOrderModel) -> WorkOrder:
        discount = None
        if row.discount_amount is not None:
            discount = Money(row.discount_amount, row.discount_currency or row.currency)
        return WorkOrder(
            UUID(row.customer_id),
            row.currency,
            UUID(row.appointment_id) if row.appointment_id else None,
            id=UUID(row.id),
            status=WorkOrderStatus(row.status),
            items=[_item_to_domain(item_row) for item_row in row.items],
            discount=discount,
            created_date=from_db_datetime(row.created_date),
            enabled=row.enabled,
        )

    def apply(self, work_order: WorkOrder, row: WorkOrderModel) -> None:
        row.customer_id = str(work_order.customer_id)
        row.appointment_id = to_db_id(work_order.appointment_id)
        row.currency = work_order.currency
        row.status = work_order.status.value
        row.discount_amount = work_order.discount.amount if work_order.discount else None
        row.discount_currency = work_order.discount.currency if work_order.discount else None
        row.created_date = to_db_datetime(work_order.created_date)
        row.enabled = work_order.enabled
        self._sync_items(work_order, row)

    def _sync_items(self, work_order: WorkOrder, row: WorkOrderModel) -> None:
        existing = {item_row.description_key: item_row for item_row in row.items}
        wanted = {item.key for item in work_order.items}

        for item_row in list(row.items):
            if item_row.description_key not in wanted:
                row.items.remove(item_row)

        for position, item in enumerate(work_order.items):
            item_row = existing.get(item.key)
            if item_row is None:
                item_row = WorkOrderItemModel()
                row.items.append(item_row)
            _apply_item(item, item_row, position)

    def _base_query(self):
        return self.db.query(WorkOrderModel).options(
            selectinload(WorkOrderModel.items)
        ).filter(WorkOrderModel.enabled.is_(True))

    @staticmethod
    def _order(query, sort_by: Optional[str], desc: bool):
        if (sort_by or "").lower() == WorkOrderSort.STATUS:
            if desc:
                return query.order_by(WorkOrderModel.status.desc(), WorkOrderModel.created_date.desc())
            return query.order_by(WorkOrderModel.status.asc(), WorkOrderModel.created_date.asc())
        if desc:
            return query.order_by(WorkOrderModel.created_date.desc())
        return query.order_by(WorkOrderModel.created_date.asc())

    def list_for_customer(
        self,
        customer_id: UUID,
        page: int,
        page_size: int,
        sort_by: Optional[str] = None,
        desc: bool = False,
    ) -> Tuple[List[WorkOrder], int]:
        """
        Enabled work orders of one customer.

        Args:
            sort_by: "created" (default) or "status"; status ties break on created date
            desc: Sort descending
        """
        query = self._base_query().filter(WorkOrderModel.customer_id == to_db_id(customer_id))
        query = self._order(query, sort_by, desc)
        rows, total = self.paginate(query, page, page_size)
        return [self.to_domain(row) for row in rows], total

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
    ) -> Tuple[List[WorkOrder], int]:
        """
        Enabled work orders across all customers.

        Args:
            status: Exact status name
            customer_id: Restrict to one customer
            from_utc: Created at or after
            to_utc: Created at or before
            search: Case-insensitive match on the order id or any item description
        """
        query = self._base_query()
        if status:
            query = query.filter(WorkOrderModel.status == status)
        if customer_id is not None:
            query = query.filter(WorkOrderModel.customer_id == to_db_id(customer_id))
        if from_utc is not None:
            query = query.filter(WorkOrderModel.created_date >= to_db_datetime(from_utc))
        if to_utc is not None:
            query = query.filter(WorkOrderModel.created_date <= to_db_datetime(to_utc))
        if search and search.strip():
            term = f"%{search.strip().lower()}%"
            matching_items = select(WorkOrderItemModel.work_order_id).where(
                WorkOrderItemModel.description_key.like(term)
            )
            query = query.filter(or_(
                WorkOrderModel.id.ilike(term),
                WorkOrderModel.id.in_(matching_items)
            ))
        query = self._order(query, sort_by, desc)
        rows, total = self.paginate(query, page, page_size)
        return [self.to_domain(row) for row in rows], total
