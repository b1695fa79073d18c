"""
Lexical tokenizer for phrasetime.

Turns the words of a phrase into typed tokens. Classification is total:
every word yields exactly one token and order is preserved.

Rules, first match wins:
1. Month name or abbreviation ("aug", "aug.", "August").
2. Weekday name or abbreviation ("tue", "tues", "Tuesday").
3. Clock time ("9am", "9:15", "9:15:30.25pm").
4. Numeral, optionally ordinal ("2", "2nd").
5. Anything else is a lowercased word.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from phrasetime.core.tokens import (
    MONTHS,
    WEEKDAYS,
    ClockTimeToken,
    MonthToken,
    NumberToken,
    Token,
    WeekdayToken,
    WordToken,
)

# H[:MM[:SS[.ffffff]]][am|pm]
# Groups: 1=hour, 2=minute, 3=second, 4=fraction, 5=meridiem
_CLOCK_TIME = re.compile(
    r'^(\d{1,2})(?::(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?)?(am|pm)?$',
    re.IGNORECASE,
)

# "2", "2nd", "23rd"
_NUMERAL = re.compile(r'^(\d+)(st|nd|rd|th)?$', re.IGNORECASE)


def normalize_phrase(phrase: str) -> list[str]:
    """Hyphens become spaces, then split on whitespace ("aug-20" -> ["aug", "20"])."""
    return phrase.replace("-", " ").split()


def tokenize(words: Iterable[str]) -> list[Token]:
    return [classify(word) for word in words]


def classify(word: str) -> Token:
    key = word.lower()

    month = _lookup(MONTHS, key)
    if month is not None:
        return MonthToken(month=month)

    weekday = _lookup(WEEKDAYS, key)
    if weekday is not None:
        return WeekdayToken(weekday=weekday)

    clock_time = _clock_time(key)
    if clock_time is not None:
        return clock_time

    match = _NUMERAL.match(key)
    if match:
        return NumberToken(value=int(match.group(1)), is_ordinal=match.group(2) is not None)

    return WordToken(text=key)


def _lookup(table: dict[str, int], key: str) -> Optional[int]:
    if key in table:
        return table[key]
    # "aug." / "tues."
    if key.endswith(".") and key[:-1] in table:
        return table[key[:-1]]
    return None


def _clock_time(key: str) -> Optional[ClockTimeToken]:
    match = _CLOCK_TIME.match(key)
    if not match:
        return None

    hour_s, minute_s, second_s, fraction_s, meridiem = match.groups()
    # A bare "9" is a number, not a time.
    if minute_s is None and meridiem is None:
        return None

    hour = int(hour_s)
    minute = int(minute_s) if minute_s else 0
    second = int(second_s) if second_s else 0
    microsecond = int(fraction_s.ljust(6, "0")) if fraction_s else 0

    if minute > 59 or second > 59:
        return None

    if meridiem:
        if not 1 <= hour <= 12:
            return None
        if meridiem == "am":
            hour = 0 if hour == 12 else hour
        else:
            hour = 12 if hour == 12 else hour + 12
    elif hour > 23:
        return None

    return ClockTimeToken(hour=hour, minute=minute, second=second, microsecond=microsecond)
