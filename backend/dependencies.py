"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service instances,
following the Dependency Inversion Principle. Every request gets its own
session, its own repositories and its own services; tests can override any
of these with app.dependency_overrides.
"""

from typing import Optional

from sqlalchemy.orm import Session
from fastapi import Depends, Query, Request

from config.settings import Settings
from constants import PagingDefaults
from database import get_db
from exceptions import ValidationError
from repositories.appointment_repository import AppointmentRepository
from repositories.customer_repository import CustomerRepository
from repositories.work_order_repository import WorkOrderRepository
from services.appointment_service import AppointmentService
from services.customer_service import CustomerService
from services.interfaces import IAppointmentRepository, ICustomerRepository, IWorkOrderRepository
from services.work_order_service import WorkOrderService


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_customer_repository(db: Session = Depends(get_db)) -> ICustomerRepository:
    """
    Factory function for creating CustomerRepository instances.

    Args:
        db: Database session (injected)

    Returns:
        ICustomerRepository: Customer repository implementation
    """
    return CustomerRepository(db)


def get_appointment_repository(db: Session = Depends(get_db)) -> IAppointmentRepository:
    """
    Factory function for creating AppointmentRepository instances.

    Args:
        db: Database session (injected)

    Returns:
        IAppointmentRepository: Appointment repository implementation
    """
    return AppointmentRepository(db)


def get_work_order_repository(db: Session = Depends(get_db)) -> IWorkOrderRepository:
    return WorkOrderRepository(db)


def get_customer_service(
    customers: ICustomerRepository = Depends(get_customer_repository),
) -> CustomerService:
    return CustomerService(customers)


def get_appointment_service(
    appointments: IAppointmentRepository = Depends(get_appointment_repository),
    customers: ICustomerRepository = Depends(get_customer_repository),
) -> AppointmentService:
    return AppointmentService(appointments, customers)


def get_work_order_service(
    work_orders: IWorkOrderRepository = Depends(get_work_order_repository),
    customers: ICustomerRepository = Depends(get_customer_repository),
    appointments: IAppointmentRepository = Depends(get_appointment_repository),
) -> WorkOrderService:
    """
    Factory function for creating WorkOrderService instances.

    The three repositories share the request's session, so the customer and
    appointment checks see the same database state as the order itself.
    """
    return WorkOrderService(work_orders, customers, appointments)


class Paging:
    """Resolved page and page size for a list endpoint."""

    def __init__(self, page: int, page_size: int):
        self.page = page
        self.page_size = page_size


def _resolve_paging(settings: Settings, page: int, page_size: Optional[int], default_size: int) -> Paging:
    size = page_size if page_size is not None else default_size
    if size > settings.max_page_size:
        raise ValidationError(
            f"page_size must not exceed {settings.max_page_size}",
            {"page_size": size}
        )
    return Paging(page, size)


def get_paging(
    page: int = Query(PagingDefaults.PAGE, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    settings: Settings = Depends(get_app_settings),
) -> Paging:
    """
    Page parameters for list endpoints.

    Raises:
        ValidationError: If page_size is above settings.max_page_size
    """
    return _resolve_paging(settings, page, page_size, settings.default_page_size)


def get_appointment_paging(
    page: int = Query(PagingDefaults.PAGE, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    settings: Settings = Depends(get_app_settings),
) -> Paging:
    """Page parameters for the global appointment list, which defaults to larger pages."""
    return _resolve_paging(
        settings, page, page_size, min(PagingDefaults.APPOINTMENTS_PAGE_SIZE, settings.max_page_size)
    )
