"""
Command Results

Explicit outcomes returned by the application services instead of boolean
flags or nil-id sentinels, so callers can tell "not found" from "rejected"
without catching exceptions.
"""

from dataclasses import dataclass, field
from enum import Enum
from math import ceil
from typing import Any, Generic, List, TypeVar

T = TypeVar('T')


class Outcome(str, Enum):
    OK = "ok"
    CREATED = "created"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class CommandResult:
    """
    Result of a mutating service call.

    value carries the payload of a successful command (e.g. the new id);
    message and details describe why a command did not succeed.
    """

    outcome: Outcome
    value: Any = None
    message: str = ""
    details: dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.outcome in (Outcome.OK, Outcome.CREATED)

    @classmethod
    def ok(cls, value: Any = None) -> "CommandResult":
        return cls(Outcome.OK, value)

    @classmethod
    def created(cls, value: Any) -> "CommandResult":
        return cls(Outcome.CREATED, value)

    @classmethod
    def not_found(cls, message: str, **details) -> "CommandResult":
        return cls(Outcome.NOT_FOUND, message=message, details=details)

    @classmethod
    def rejected(cls, message: str, **details) -> "CommandResult":
        return cls(Outcome.REJECTED, message=message, details=details)

    @classmethod
    def from_error(cls, error) -> "CommandResult":
        """REJECTED result carrying a domain error's message and details."""
        return cls(Outcome.REJECTED, message=error.message, details=dict(error.details))

    @classmethod
    def conflict(cls, message: str, **details) -> "CommandResult":
        return cls(Outcome.CONFLICT, message=message, details=details)


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of a list query."""

    items: List[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.page_size) if self.page_size > 0 else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1 and self.total_pages > 0
