"""
AppointmentStatus Value Object
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Scheduled -> Completed | Cancelled."""

    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further transitions)."""
        return self in {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        valid_transitions = {
            AppointmentStatus.SCHEDULED: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED},
            AppointmentStatus.COMPLETED: set(),
            AppointmentStatus.CANCELLED: {AppointmentStatus.CANCELLED},
        }
        return new_status in valid_transitions.get(self, set())

    @classmethod
    def from_string(cls, value: str) -> "AppointmentStatus":
        """
        Create AppointmentStatus from a case-insensitive name.

        Raises:
            ValueError: If value is not a valid status
        """
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Invalid appointment status: {value}")
