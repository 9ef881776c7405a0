"""
WorkOrderStatus Value Object

Lifecycle state of a work order.
"""

from enum import Enum
from typing import Dict, Set


class WorkOrderStatus(str, Enum):
    """
    Work order lifecycle.

    Draft -> InProgress -> Completed, with Cancelled reachable from any
    non-Completed state.
    """

    DRAFT = "Draft"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    def is_finalized(self) -> bool:
        """Check if items and discount are locked."""
        return self in {WorkOrderStatus.COMPLETED, WorkOrderStatus.CANCELLED}

    def can_transition_to(self, new_status: "WorkOrderStatus") -> bool:
        """
        Check if transition to new status is valid.

        Args:
            new_status: Target status

        Returns:
            True if transition is allowed
        """
        return new_status in _TRANSITIONS.get(self, set())

    @classmethod
    def from_string(cls, value: str) -> "WorkOrderStatus":
        """
        Create WorkOrderStatus from a case-insensitive name.

        Raises:
            ValueError: If value is not a valid status
        """
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Invalid work order status: {value}")


_TRANSITIONS: Dict[WorkOrderStatus, Set[WorkOrderStatus]] = {
    WorkOrderStatus.DRAFT: {WorkOrderStatus.IN_PROGRESS, WorkOrderStatus.CANCELLED},
    WorkOrderStatus.IN_PROGRESS: {WorkOrderStatus.COMPLETED, WorkOrderStatus.CANCELLED},
    WorkOrderStatus.COMPLETED: set(),
    # Cancelling twice is a no-op rather than an error
    WorkOrderStatus.CANCELLED: {WorkOrderStatus.CANCELLED},
}
