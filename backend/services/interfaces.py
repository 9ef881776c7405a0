"""
Repository Interfaces

Abstract base classes the service layer depends on, following the Dependency
Inversion Principle. The SQLAlchemy implementations live in repositories/;
tests may substitute in-memory fakes.

Every repository follows the same contract: get(id) and get_for_update(id)
return a fully hydrated aggregate or None, add(entity) registers a new one,
and save() persists every change made through the repository in one commit.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from domain.aggregates.work_order import WorkOrder
from domain.entities.appointment import Appointment
from domain.entities.customer import Customer


class IRepository(ABC):
    """Load / add / save contract shared by all aggregate repositories."""

    @abstractmethod
    def get(self, id: UUID, include_disabled: bool = False):
        """
        Load an aggregate for reading.

        Args:
            id: Aggregate id
            include_disabled: Also return soft-deleted records

        Returns:
            The aggregate or None if not found
        """
        pass

    @abstractmethod
    def get_for_update(self, id: UUID, include_disabled: bool = False):
        """Load an aggregate the caller intends to mutate and save."""
        pass

    @abstractmethod
    def add(self, entity):
        """Register a new aggregate to be inserted on save()."""
        pass

    @abstractmethod
    def save(self) -> None:
        """
        Persist pending changes.

        Raises:
            DatabaseError: If the storage layer rejects the changes
        """
        pass


class ICustomerRepository(IRepository):
    """
    Abstract interface for customer persistence.
    """

    @abstractmethod
    def exists(self, id: UUID, include_disabled: bool = False) -> bool:
        pass

    @abstractmethod
    def customer_number_taken(self, customer_number: str) -> bool:
        pass

    @abstractmethod
    def list_customers(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_dir: str = "desc",
        status: str = "enabled",
    ) -> Tuple[List[Customer], int]:
        """
        Page through customers.

        Returns:
            Tuple of (customers on the page, total matching customers)
        """
        pass


class IAppointmentRepository(IRepository):
    """
    Abstract interface for appointment persistence.

    Owns the cross-appointment rule that a customer's Scheduled appointments
    never overlap.
    """

    @abstractmethod
    def has_conflict(
        self,
        customer_id: UUID,
        start_utc: datetime,
        end_utc: datetime,
        exclude_id: Optional[UUID] = None,
    ) -> bool:
        """
        Check whether [start_utc, end_utc) overlaps another Scheduled
        appointment of the same customer.

        Args:
            customer_id: Owner of the appointments to check
            start_utc: Proposed start
            end_utc: Proposed end
            exclude_id: Appointment being rescheduled, ignored in the check

        Returns:
            True if a conflicting appointment exists
        """
        pass

    @abstractmethod
    def list_for_customer(
        self,
        customer_id: UUID,
        from_utc: Optional[datetime],
        to_utc: Optional[datetime],
        page: int,
        page_size: int,
    ) -> Tuple[List[Appointment], int]:
        """Customer's appointments ordered by start, ascending."""
        pass

    @abstractmethod
    def list_appointments(
        self,
        customer_id: Optional[UUID],
        status: Optional[str],
        page: int,
        page_size: int,
    ) -> Tuple[List[Appointment], int]:
        """All appointments ordered by start, newest first."""
        pass


class IWorkOrderRepository(IRepository):
    """
    Abstract interface for work order persistence.
    """

    @abstractmethod
    def list_for_customer(
        self,
        customer_id: UUID,
        page: int,
        page_size: int,
        sort_by: Optional[str] = None,
        desc: bool = False,
    ) -> Tuple[List[WorkOrder], int]:
        """Enabled work orders of one customer."""
        pass

    @abstractmethod
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
        """Enabled work orders across all customers, filtered."""
        pass
