"""
Customer Service

Handles business logic for customer registration, profile changes, soft
delete and restore, measurements, notes and the paged customer list.
"""

from typing import Optional
from uuid import UUID
import logging

from constants import CustomerSort, RecordStatusFilter
from domain.entities.customer import (
    ContactInfo,
    Customer,
    CustomerPreferences,
    CustomerRegistered,
    MeasurementRecord,
    PersonalInfo,
)
from domain.exceptions import DomainError
from dtos.request.customer_request import (
    AddMeasurementRequest,
    AddNoteRequest,
    CustomerDetailsRequest,
    RegisterCustomerRequest,
)
from dtos.response.customer_response import CustomerDetailsResponse, CustomerSummaryResponse
from exceptions import ValidationError
from services.interfaces import ICustomerRepository
from services.results import CommandResult, PageResult
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


def _profile_from_request(request: CustomerDetailsRequest):
    personal = PersonalInfo(request.first_name, request.last_name, request.date_of_birth)
    contact = ContactInfo(request.email, request.phone or "", request.address or "")
    preferences = CustomerPreferences(
        request.style_preference or "",
        request.fit_preference or "",
        request.fabric_preference,
    )
    return personal, contact, preferences


class CustomerService:
    """Service for customer-related business logic."""

    def __init__(self, customers: ICustomerRepository):
        """
        Initialize CustomerService.

        Args:
            customers: Customer repository
        """
        self.customers = customers

    @log_operation("register_customer")
    def register(self, *, request: RegisterCustomerRequest) -> CommandResult:
        """
        Register a new customer.

        Returns:
            CREATED with the new customer id, CONFLICT when the customer number
            is already used, REJECTED when the details are invalid
        """
        if self.customers.customer_number_taken(request.customer_number):
            return CommandResult.conflict(
                f"Customer number {request.customer_number.strip()} is already in use",
                customer_number=request.customer_number.strip()
            )
        try:
            personal, contact, preferences = _profile_from_request(request)
            customer = Customer.register(request.customer_number, personal, contact, preferences)
        except DomainError as e:
            logger.warning(f"Customer registration rejected: {e.message}")
            return CommandResult.from_error(e)

        self.customers.add(customer)
        self.customers.save()

        for event in customer.pull_events():
            if isinstance(event, CustomerRegistered):
                logger.info(f"Customer registered: {event.customer_id} <{event.email}>")
        return CommandResult.created(customer.id)

    @log_operation("update_customer")
    def update(self, *, customer_id: UUID, request: CustomerDetailsRequest) -> CommandResult:
        customer = self.customers.get_for_update(customer_id)
        if customer is None:
            return CommandResult.not_found("Customer not found", customer_id=str(customer_id))
        try:
            personal, contact, preferences = _profile_from_request(request)
        except DomainError as e:
            return CommandResult.from_error(e)

        customer.update_personal_info(personal)
        customer.update_contact_info(contact)
        customer.update_preferences(preferences)
        self.customers.save()
        return CommandResult.ok()

    @log_operation("delete_customer")
    def delete(self, *, customer_id: UUID) -> CommandResult:
        """Soft-delete a customer; the record can be restored later."""
        customer = self.customers.get_for_update(customer_id)
        if customer is None:
            return CommandResult.not_found("Customer not found", customer_id=str(customer_id))
        customer.soft_delete()
        self.customers.save()
        return CommandResult.ok()

    @log_operation("restore_customer")
    def restore(self, *, customer_id: UUID) -> CommandResult:
        customer = self.customers.get_for_update(customer_id, include_disabled=True)
        if customer is None:
            return CommandResult.not_found("Customer not found", customer_id=str(customer_id))
        customer.restore()
        self.customers.save()
        return CommandResult.ok()

    @log_operation("add_measurement")
    def add_measurement(self, *, customer_id: UUID, request: AddMeasurementRequest) -> CommandResult:
        customer = self.customers.get_for_update(customer_id)
        if customer is None:
            return CommandResult.not_found("Customer not found", customer_id=str(customer_id))
        try:
            record = MeasurementRecord(
                request.date, request.chest, request.waist, request.hips, request.sleeve
            )
        except DomainError as e:
            return CommandResult.from_error(e)
        customer.add_measurement(record)
        self.customers.save()
        return CommandResult.ok()

    @log_operation("add_customer_note")
    def add_note(self, *, customer_id: UUID, request: AddNoteRequest) -> CommandResult:
        customer = self.customers.get_for_update(customer_id)
        if customer is None:
            return CommandResult.not_found("Customer not found", customer_id=str(customer_id))
        try:
            customer.add_note(request.text, request.author)
        except DomainError as e:
            return CommandResult.from_error(e)
        self.customers.save()
        return CommandResult.ok()

    def get_details(self, customer_id: UUID) -> Optional[CustomerDetailsResponse]:
        """
        Customer profile with measurements and notes, newest first.

        Soft-deleted customers are returned too so they can be reviewed
        before being restored.
        """
        customer = self.customers.get(customer_id, include_disabled=True)
        if customer is None:
            return None
        return CustomerDetailsResponse.from_domain(customer)

    def list_customers(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_dir: str = "desc",
        status: str = RecordStatusFilter.ENABLED,
    ) -> PageResult[CustomerSummaryResponse]:
        """
        Page through customers.

        Raises:
            ValidationError: If sort_by, sort_dir or status is not recognised
        """
        invalid = {}
        if sort_by and sort_by.lower() not in CustomerSort.ALL:
            invalid["sort_by"] = f"must be one of {sorted(CustomerSort.ALL)}"
        if sort_dir.lower() not in ("asc", "desc"):
            invalid["sort_dir"] = "must be asc or desc"
        status = (status or RecordStatusFilter.ENABLED).lower()
        if status not in (RecordStatusFilter.ENABLED, RecordStatusFilter.DISABLED, RecordStatusFilter.ALL):
            invalid["status"] = "must be enabled, disabled or all"
        if invalid:
            raise ValidationError("Invalid customer list parameters", invalid)

        customers, total = self.customers.list_customers(
            page, page_size, search, sort_by, sort_dir, status
        )
        return PageResult(
            [CustomerSummaryResponse.from_domain(c) for c in customers], total, page, page_size
        )
