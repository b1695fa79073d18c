from __future__ import annotations

"""Reference instant for relative resolution.

- Every relative phrase ("tomorrow at 9am", "tuesday") resolves against a
  CurrentInstant supplied by the caller.
- The wall clock is read only by the entry point, and only when the caller
  did not supply one.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Union


UTC = timezone.utc

ErlTuple = tuple[tuple[int, int, int], tuple[int, int, int]]


@dataclass(frozen=True, slots=True)
class CurrentInstant:
    date: date
    time: time

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CurrentInstant":
        # Aware datetimes are read as UTC wall time.
        if dt.tzinfo is not None and dt.utcoffset() is not None:
            dt = dt.astimezone(UTC)
        return cls(date=dt.date(), time=dt.time().replace(tzinfo=None))

    @classmethod
    def from_erl(cls, value: ErlTuple) -> "CurrentInstant":
        """Build from the nested `((year, month, day), (hour, minute, second))` form."""
        (year, month, day), (hour, minute, second) = value
        return cls(date=date(year, month, day), time=time(hour, minute, second))

    @classmethod
    def coerce(cls, value: Union["CurrentInstant", datetime, date, ErlTuple, Any]) -> "CurrentInstant":
        if isinstance(value, CurrentInstant):
            return value
        # datetime is a date subclass, so it must be checked first.
        if isinstance(value, datetime):
            return cls.from_datetime(value)
        if isinstance(value, date):
            return cls(date=value, time=time(0, 0, 0))
        if isinstance(value, tuple) and len(value) == 2:
            return cls.from_erl(value)
        raise TypeError(f"Unsupported value for currently: {value!r}")


def utc_now() -> CurrentInstant:
    return CurrentInstant.from_datetime(datetime.now(UTC))
