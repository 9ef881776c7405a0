"""
Customer repository for customer-specific data access operations.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from constants import CustomerSort, RecordStatusFilter
from domain.entities.customer import (
    ContactInfo,
    Customer,
    CustomerNote,
    CustomerPreferences,
    CustomerStatus,
    MeasurementRecord,
    PersonalInfo,
)
from models import (
    Customer as CustomerModel,
    CustomerMeasurement as MeasurementModel,
    CustomerNote as NoteModel,
)
from services.interfaces import ICustomerRepository
from .base_repository import BaseRepository, from_db_datetime, to_db_datetime


class CustomerRepository(BaseRepository[CustomerModel, Customer], ICustomerRepository):
    """Repository for Customer aggregate persistence."""

    def __init__(self, db: Session):
        super().__init__(db, CustomerModel)

    def to_domain(self, row: CustomerModel) -> Customer:
        return Customer(
            row.customer_number,
            PersonalInfo(row.first_name, row.last_name, row.date_of_birth),
            ContactInfo(row.email, row.phone or "", row.address or ""),
            CustomerPreferences(
                row.style_preference or "",
                row.fit_preference or "",
                row.fabric_preference,
            ),
            id=UUID(row.id),
            status=CustomerStatus(row.status),
            total_spent=row.total_spent or 0,
            registration_date=from_db_datetime(row.registration_date),
            measurements=[
                MeasurementRecord(
                    from_db_datetime(m.date), m.chest, m.waist, m.hips, m.sleeve, id=UUID(m.id)
                )
                for m in row.measurements
            ],
            notes=[
                CustomerNote(n.text, n.author, from_db_datetime(n.date), id=UUID(n.id))
                for n in row.notes
            ],
            created_date=from_db_datetime(row.created_date),
            enabled=row.enabled,
        )

    def apply(self, customer: Customer, row: CustomerModel) -> None:
        row.customer_number = customer.customer_number
        row.first_name = customer.personal_info.first_name
        row.last_name = customer.personal_info.last_name
        row.date_of_birth = customer.personal_info.date_of_birth
        row.email = customer.contact_info.email
        row.phone = customer.contact_info.phone
        row.address = customer.contact_info.address
        row.style_preference = customer.preferences.style
        row.fit_preference = customer.preferences.fit
        row.fabric_preference = customer.preferences.notes
        row.status = customer.status.value
        row.total_spent = customer.total_spent
        row.registration_date = to_db_datetime(customer.registration_date)
        row.created_date = to_db_datetime(customer.created_date)
        row.enabled = customer.enabled

        # Measurements and notes are append-only
        known_measurements = {m.id for m in row.measurements}
        for record in customer.measurement_history:
            if str(record.id) not in known_measurements:
                row.measurements.append(MeasurementModel(
                    id=str(record.id),
                    date=to_db_datetime(record.date),
                    chest=record.chest,
                    waist=record.waist,
                    hips=record.hips,
                    sleeve=record.sleeve,
                ))

        known_notes = {n.id for n in row.notes}
        for note in customer.notes:
            if str(note.id) not in known_notes:
                row.notes.append(NoteModel(
                    id=str(note.id),
                    date=to_db_datetime(note.date),
                    text=note.text,
                    author=note.author,
                ))

    def customer_number_taken(self, customer_number: str) -> bool:
        """Check the number against every customer, including soft-deleted ones."""
        return self.db.query(CustomerModel.id).filter(
            CustomerModel.customer_number == customer_number.strip()
        ).first() is not None

    def list_customers(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_dir: str = "desc",
        status: str = RecordStatusFilter.ENABLED,
    ) -> Tuple[List[Customer], int]:
        """
        Page through customers.

        Args:
            page: 1-based page number
            page_size: Rows per page
            search: Case-insensitive match on number, email, first or last name
            sort_by: One of CustomerSort.ALL; defaults to registration date
            sort_dir: "asc" or "desc"
            status: enabled, disabled or all

        Returns:
            Tuple of (customers on the page, total matching customers)
        """
        query = self.db.query(CustomerModel).options(
            selectinload(CustomerModel.measurements),
            selectinload(CustomerModel.notes),
        )

        if status == RecordStatusFilter.ENABLED:
            query = query.filter(CustomerModel.enabled.is_(True))
        elif status == RecordStatusFilter.DISABLED:
            query = query.filter(CustomerModel.enabled.is_(False))

        if search and search.strip():
            term = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                CustomerModel.customer_number.ilike(term),
                CustomerModel.email.ilike(term),
                CustomerModel.first_name.ilike(term),
                CustomerModel.last_name.ilike(term),
            ))

        columns = {
            CustomerSort.FIRST_NAME: CustomerModel.first_name,
            CustomerSort.LAST_NAME: CustomerModel.last_name,
            CustomerSort.EMAIL: CustomerModel.email,
            CustomerSort.CUSTOMER_NUMBER: CustomerModel.customer_number,
            CustomerSort.CREATED: CustomerModel.registration_date,
            CustomerSort.REGISTRATION_DATE: CustomerModel.registration_date,
        }
        column = columns.get((sort_by or "").lower())
        if column is None:
            query = query.order_by(CustomerModel.registration_date.desc())
        elif sort_dir.lower() == "asc":
            query = query.order_by(column.asc(), CustomerModel.id)
        else:
            query = query.order_by(column.desc(), CustomerModel.id)

        rows, total = self.paginate(query, page, page_size)
        return [self.to_domain(row) for row in rows], total
