"""Calendar-day range normalization for report queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

DateLike = Union[date, datetime]


def as_day(value: DateLike) -> date:
    """Strip the time-of-day part, keeping the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DateRange:
    """Inclusive range covering whole calendar days.

    ``end`` is the last representable instant of the final day, so a range
    built from the same day on both sides covers that entire day.
    """

    start: datetime
    end: datetime

    @classmethod
    def for_days(cls, start: DateLike, end: DateLike) -> "DateRange":
        return cls(
            start=datetime.combine(as_day(start), time.min),
            end=datetime.combine(as_day(end), time.max),
        )

    @classmethod
    def for_day(cls, day: DateLike) -> "DateRange":
        return cls.for_days(day, day)

    @property
    def first_day(self) -> date:
        return self.start.date()

    @property
    def last_day(self) -> date:
        return self.end.date()

    def query_bounds(self) -> tuple[str, str]:
        """Half-open ISO text bounds ``[first_day, last_day + 1)`` for SQL text columns."""
        upper = self.last_day + timedelta(days=1)
        return self.first_day.isoformat(), upper.isoformat()

    def contains(self, moment: DateLike) -> bool:
        if not isinstance(moment, datetime):
            moment = datetime.combine(moment, time.min)
        elif moment.tzinfo is not None:
            # Range bounds are naive plant-local times; compare on the recorded wall clock
            moment = moment.replace(tzinfo=None)
        return self.start <= moment <= self.end
