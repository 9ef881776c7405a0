"""
TimeWindow Value Object

Half-open [start, end) interval in UTC used for appointment scheduling.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from domain.exceptions import InvalidArgumentError


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class TimeWindow:
    """Immutable [start, end) window; end must be after start."""

    start: datetime
    end: datetime

    def __post_init__(self):
        """Normalize to UTC and validate ordering."""
        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            raise InvalidArgumentError("Start and end must be datetimes")
        start = ensure_utc(self.start)
        end = ensure_utc(self.end)
        if end <= start:
            raise InvalidArgumentError(
                "End must be after start",
                {"start": start.isoformat(), "end": end.isoformat()}
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "TimeWindow") -> bool:
        """Windows touching at a boundary do not overlap."""
        return self.start < other.end and other.start < self.end
