"""
Entity base class

Identity, creation timestamp and the soft-delete flag shared by every
entity and aggregate root.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from domain.exceptions import InvalidArgumentError
from domain.value_objects.time_window import ensure_utc, utc_now

NIL_UUID = UUID(int=0)


def require_id(value: Optional[UUID], field: str) -> UUID:
    """
    Validate that a reference id is present.

    Raises:
        InvalidArgumentError: If the id is missing or the nil UUID
    """
    if value is None:
        raise InvalidArgumentError(f"{field} is required", {field: None})
    if not isinstance(value, UUID):
        try:
            value = UUID(str(value))
        except ValueError:
            raise InvalidArgumentError(f"{field} is not a valid id", {field: str(value)})
    if value == NIL_UUID:
        raise InvalidArgumentError(f"{field} is required", {field: str(value)})
    return value


class Entity:
    """Base class for objects compared by identity rather than value."""

    def __init__(
        self,
        id: Optional[UUID] = None,
        created_date: Optional[datetime] = None,
        enabled: bool = True,
    ):
        self.id = id or uuid4()
        self.created_date = ensure_utc(created_date) if created_date else utc_now()
        self.enabled = enabled

    def soft_delete(self) -> None:
        """Mark as disabled; the row is kept and can be restored."""
        self.enabled = False

    def restore(self) -> None:
        self.enabled = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity) or type(self) is not type(other):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))
