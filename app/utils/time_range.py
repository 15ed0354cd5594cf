"""Half-open UTC time intervals."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from app.utils.exceptions import InvalidRangeError


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class TimeRange:
    """The interval [start, end). A range ending at T does not overlap one starting at T."""

    start: datetime
    end: datetime

    def __post_init__(self):
        start, end = as_utc(self.start), as_utc(self.end)
        if start >= end:
            raise InvalidRangeError()
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        return self.start < other.end and other.start < self.end
