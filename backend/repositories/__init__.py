"""
Repository layer for data access abstraction.

This package contains repository classes that map the domain aggregates onto
the SQLAlchemy models and encapsulate the list and conflict queries.
"""

from .base_repository import BaseRepository
from .customer_repository import CustomerRepository
from .appointment_repository import AppointmentRepository
from .work_order_repository import WorkOrderRepository

__all__ = [
    "BaseRepository",
    "CustomerRepository",
    "AppointmentRepository",
    "WorkOrderRepository",
]
