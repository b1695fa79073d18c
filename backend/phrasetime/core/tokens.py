"""
Token models for phrasetime.

A phrase is split into words and each word becomes exactly one token.
Tokens are frozen and carry only range-checked values, so the grammar
never has to re-validate a minute or a month number.

Shared with calendar arithmetic:
- Weekday numbering (Monday = 0 ... Sunday = 6), identical to
  `datetime.date.weekday()`.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field


class TokenKind(str, Enum):
    """
    Semantic class of a token. The grammar matches on sequences of these.
    """
    MONTH = "month"
    NUMBER = "number"
    CLOCK_TIME = "time"
    WEEKDAY = "weekday"
    WORD = "word"


# Index is the weekday number. Both the tokenizer and calendar_math read this.
WEEKDAY_NAMES: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

WEEKDAY_ABBREVIATIONS: dict[str, int] = {
    "mon": 0,
    "tue": 1, "tues": 1,
    "wed": 2,
    "thu": 3, "thur": 3, "thurs": 3,
    "fri": 4,
    "sat": 5,
    "sun": 6,
}

MONTH_NAMES: tuple[str, ...] = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

MONTH_ABBREVIATIONS: dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4,
    "jun": 6, "jul": 7, "aug": 8, "sep": 9, "sept": 9,
    "oct": 10, "nov": 11, "dec": 12,
}

WEEKDAYS: dict[str, int] = {name: i for i, name in enumerate(WEEKDAY_NAMES)}
WEEKDAYS.update(WEEKDAY_ABBREVIATIONS)

MONTHS: dict[str, int] = {name: i + 1 for i, name in enumerate(MONTH_NAMES)}
MONTHS.update(MONTH_ABBREVIATIONS)


class _Token(BaseModel):
    kind: ClassVar[TokenKind]

    model_config = ConfigDict(frozen=True)


class MonthToken(_Token):
    kind: ClassVar[TokenKind] = TokenKind.MONTH

    month: int = Field(ge=1, le=12)


class NumberToken(_Token):
    """
    A bare numeral. `is_ordinal` records a 1st/2nd/3rd/4th suffix; no
    pattern depends on it today.
    """
    kind: ClassVar[TokenKind] = TokenKind.NUMBER

    value: int = Field(ge=0)
    is_ordinal: bool = False


class ClockTimeToken(_Token):
    """
    A time of day, already folded to 24-hour form.
    """
    kind: ClassVar[TokenKind] = TokenKind.CLOCK_TIME

    hour: int = Field(ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)
    second: int = Field(default=0, ge=0, le=59)
    microsecond: int = Field(default=0, ge=0, le=999_999)


class WeekdayToken(_Token):
    kind: ClassVar[TokenKind] = TokenKind.WEEKDAY

    weekday: int = Field(ge=0, le=6)


class WordToken(_Token):
    """
    Anything else, lowercased. Connector words ("at", "of", "to") and
    relative markers ("today", "evening") arrive as these.
    """
    kind: ClassVar[TokenKind] = TokenKind.WORD

    text: str


Token = Union[MonthToken, NumberToken, ClockTimeToken, WeekdayToken, WordToken]


def describe(token: Token) -> dict:
    """Plain dict view of a token, used for trace logging."""
    return {"kind": token.kind.value, **token.model_dump()}
