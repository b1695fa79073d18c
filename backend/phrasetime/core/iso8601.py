"""
Strict ISO-8601 fast path for phrasetime.

Machine-formatted timestamps skip the grammar entirely. Anything this
module rejects falls through to natural-language resolution.

Accepted:
- 2012-08-02
- 2012-08-02T13:00 / 2012-08-02 13:00:00
- fractional seconds of any length (truncated or padded to microseconds)
- Z, +HH:MM, +HHMM or +HH after a time
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from phrasetime.core.errors import Iso8601Error

# Groups: 1-3=date, 4-6=time, 7=fraction, 8=zone
_ISO8601 = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})'
    r'(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:[.,](\d+))?)?'
    r'(Z|[+-]\d{2}(?::?\d{2})?)?)?$',
    re.IGNORECASE,
)

# Groups: 1=sign, 2=hours, 3=minutes
_OFFSET = re.compile(r'^([+-])(\d{2}):?(\d{2})?$')


def parse_iso8601(text: str) -> tuple[datetime, Optional[int]]:
    """
    Parse a strict ISO-8601 timestamp.

    Returns:
        (naive wall-clock datetime, offset in seconds east of UTC or None)

    Raises:
        Iso8601Error: the text is not strict ISO-8601 or names an impossible date.
    """
    match = _ISO8601.match(text.strip())
    if not match:
        raise Iso8601Error(f"Not ISO-8601: {text!r}")

    year, month, day, hour, minute, second, fraction, zone = match.groups()

    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    try:
        ts = datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            microsecond,
        )
    except ValueError as e:
        raise Iso8601Error(f"Invalid ISO-8601 date: {text!r}") from e

    return ts, _offset_seconds(zone)


def _offset_seconds(zone: Optional[str]) -> Optional[int]:
    if zone is None:
        return None
    if zone.upper() == "Z":
        return 0

    match = _OFFSET.match(zone)
    if not match:
        raise Iso8601Error(f"Invalid UTC offset: {zone!r}")

    sign, hours, minutes = match.groups()
    hours_i = int(hours)
    minutes_i = int(minutes or 0)
    if hours_i > 23 or minutes_i > 59:
        raise Iso8601Error(f"UTC offset out of range: {zone!r}")

    seconds = hours_i * 3600 + minutes_i * 60
    return -seconds if sign == "-" else seconds
