from __future__ import annotations

"""Calendar arithmetic for the grammar resolver.

Rules:
- Shifts go through real calendar arithmetic (month lengths, leap years, year rollover).
- combine() never clamps: an impossible date is a CalendarInvalidError.
- next_weekday() looks strictly after the given date and always succeeds within 7 days.
"""

import calendar
from dataclasses import dataclass, fields, replace
from datetime import date, datetime, timedelta
from typing import Optional

from phrasetime.core.errors import CalendarInvalidError
from phrasetime.core.tokens import WEEKDAY_NAMES


@dataclass(frozen=True, slots=True)
class FieldSet:
    """Partial timestamp assembled by a grammar handler."""

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    microsecond: Optional[int] = None

    def merged(self, **values: Optional[int]) -> "FieldSet":
        return replace(self, **values)

    def missing(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is None]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def combine(fs: FieldSet) -> datetime:
    missing = fs.missing()
    if missing:
        raise CalendarInvalidError(f"Missing fields: {', '.join(missing)}")

    if not 1 <= fs.month <= 12:
        raise CalendarInvalidError(f"Month out of range: {fs.month}")
    if not 1 <= fs.day <= days_in_month(fs.year, fs.month):
        raise CalendarInvalidError(f"Day out of range: {fs.year}-{fs.month:02d}-{fs.day}")

    try:
        return datetime(fs.year, fs.month, fs.day, fs.hour, fs.minute, fs.second, fs.microsecond)
    except (ValueError, OverflowError) as e:
        raise CalendarInvalidError(str(e)) from e


def add_seconds(ts: datetime, delta: int) -> datetime:
    try:
        return ts + timedelta(seconds=delta)
    except OverflowError as e:
        raise CalendarInvalidError(f"Shift of {delta}s leaves the supported calendar range") from e


def next_weekday(from_date: date, weekday: int) -> date:
    if not 0 <= weekday < len(WEEKDAY_NAMES):
        raise ValueError(f"Weekday out of range: {weekday}")

    for offset in range(1, 8):
        candidate = from_date + timedelta(days=offset)
        if candidate.weekday() == weekday:
            return candidate

    # Unreachable with a 7-day week.
    raise AssertionError("no matching weekday within 7 days")
