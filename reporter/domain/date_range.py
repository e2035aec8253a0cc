"""Date ranges used to decide whether an item belongs to a report period."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from reporter.domain.errors import UnknownPeriod


class DateRange(ABC):
    """Checks if a point in time is in range."""

    @abstractmethod
    def include(self, timestamp: Optional[datetime]) -> bool:
        """Return True if the range includes the timestamp (never for None)."""


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _align(timestamp: datetime, reference: datetime) -> datetime:
    # Compare calendar days in the reference's timezone when both are aware.
    if timestamp.tzinfo is not None and reference.tzinfo is not None:
        return timestamp.astimezone(reference.tzinfo)
    return timestamp


@dataclass(frozen=True)
class DailyRange(DateRange):
    """Range of one calendar day around the reference instant."""

    reference: datetime = field(default_factory=_local_now)

    def include(self, timestamp: Optional[datetime]) -> bool:
        if timestamp is None:
            return False
        return _align(timestamp, self.reference).date() == self.reference.date()


@dataclass(frozen=True)
class WeeklyRange(DateRange):
    """Trailing range: anything after reference minus seven days.

    There is no upper bound, a timestamp after the reference still matches.
    """

    reference: datetime = field(default_factory=_local_now)

    def include(self, timestamp: Optional[datetime]) -> bool:
        if timestamp is None:
            return False
        return timestamp > self.reference - timedelta(days=7)


@dataclass(frozen=True)
class FixedRange(DateRange):
    """Hardcoded week of 2020-06-07..2020-06-13, for tests and examples only."""

    start: date = date(2020, 6, 7)
    end: date = date(2020, 6, 13)

    def include(self, timestamp: Optional[datetime]) -> bool:
        if timestamp is None:
            return False
        return self.start <= timestamp.date() <= self.end


PERIODS = ("daily", "weekly")


def parse_range(name: str, now: Optional[datetime] = None) -> DateRange:
    """
    Build a date range from a period name.

    Args:
        name: Either "daily" or "weekly"
        now: Reference instant, defaults to the current local time

    Returns:
        DateRange anchored at `now`

    Raises:
        UnknownPeriod: If the name is not a known period
    """
    if now is None:
        now = _local_now()
    if name == "daily":
        return DailyRange(now)
    if name == "weekly":
        return WeeklyRange(now)
    raise UnknownPeriod(name)
