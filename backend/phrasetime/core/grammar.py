"""
Grammar resolver for phrasetime.

Matches a token sequence against an ordered catalogue of phrase shapes
and turns the first exact match into a concrete timestamp.

Strictly adheres to:
- Exact-length matches only. No prefix or fuzzy matching.
- First matching pattern wins; no match is an UnknownFormatError.
- Every relative computation reads the supplied CurrentInstant, never the wall clock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from phrasetime.core.calendar_math import FieldSet, add_seconds, combine, next_weekday
from phrasetime.core.clock import CurrentInstant
from phrasetime.core.errors import UnknownFormatError
from phrasetime.core.tokens import (
    ClockTimeToken,
    MonthToken,
    NumberToken,
    Token,
    TokenKind,
    WordToken,
)

logger = logging.getLogger(__name__)

DAY_SECONDS = 86400
HALF_HOUR_SECONDS = 1800
NOON = 12
EVENING_SHIFT = 12

Handler = Callable[[Sequence[Token], CurrentInstant], datetime]


def shape_of(tokens: Sequence[Token]) -> tuple[str, ...]:
    """
    Normalized shape signature. Words keep their literal so "at" and "of"
    select different patterns; other tokens contribute only their kind.
    """
    return tuple(
        f"word:{t.text}" if isinstance(t, WordToken) else t.kind.value
        for t in tokens
    )


@dataclass(frozen=True, slots=True)
class Pattern:
    shape: tuple[str, ...]
    handler: Handler
    example: str

    def matches(self, shape: tuple[str, ...]) -> bool:
        return self.shape == shape


# --- Field helpers ---

def _on_date(d: date) -> FieldSet:
    return FieldSet(year=d.year, month=d.month, day=d.day)


def _at_time(fs: FieldSet, t: ClockTimeToken) -> FieldSet:
    return fs.merged(hour=t.hour, minute=t.minute, second=t.second, microsecond=t.microsecond)


def _at_hour(fs: FieldSet, hour: int) -> FieldSet:
    return fs.merged(hour=hour, minute=0, second=0, microsecond=0)


def _trailing_time(tokens: Sequence[Token]) -> Optional[ClockTimeToken]:
    last = tokens[-1]
    return last if isinstance(last, ClockTimeToken) else None


def _day_and_month(
    currently: CurrentInstant,
    day: NumberToken,
    month: MonthToken,
    time: Optional[ClockTimeToken],
) -> datetime:
    fs = FieldSet(year=currently.year, month=month.month, day=day.value)
    if time is None:
        return combine(_at_hour(fs, 0))
    return combine(_at_time(fs, time))


# --- Handlers ---

def _month_day(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # aug 2 / aug 2 9am / aug 2 at 9am
    return _day_and_month(currently, tokens[1], tokens[0], _trailing_time(tokens))


def _day_month(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # 2 aug / 2 aug 9am / 2 aug at 9am
    return _day_and_month(currently, tokens[0], tokens[1], _trailing_time(tokens))


def _day_of_month(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # 2nd of aug / 2nd of aug 9am / 2nd of aug at 9am
    return _day_and_month(currently, tokens[0], tokens[2], _trailing_time(tokens))


def _time_today(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # 9am / today 9am / today at 9am
    return combine(_at_time(_on_date(currently.date), tokens[-1]))


def _minutes_to_hour(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # 10 to 8
    minutes, hour = tokens[0], tokens[2]
    ts = combine(_at_hour(_on_date(currently.date), hour.value))
    return add_seconds(ts, -minutes.value * 60)


def _minutes_to_time(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # 10 to 8am
    minutes = tokens[0]
    ts = combine(_at_time(_on_date(currently.date), tokens[2]))
    return add_seconds(ts, -minutes.value * 60)


def _half_past(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # half past 2
    ts = combine(_at_hour(_on_date(currently.date), tokens[2].value))
    return add_seconds(ts, HALF_HOUR_SECONDS)


def _yesterday(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    return add_seconds(_time_today(tokens, currently), -DAY_SECONDS)


def _tomorrow(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    return add_seconds(_time_today(tokens, currently), DAY_SECONDS)


def _weekday_noon(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # tuesday
    d = next_weekday(currently.date, tokens[0].weekday)
    return combine(_at_hour(_on_date(d), NOON))


def _weekday_at_time(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # tuesday 9am / tuesday at 9am
    d = next_weekday(currently.date, tokens[0].weekday)
    return combine(_at_time(_on_date(d), tokens[-1]))


def _morning(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # 6 in the morning
    return combine(_at_hour(_on_date(currently.date), tokens[0].value))


def _evening(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # 6 in the evening
    return combine(_at_hour(_on_date(currently.date), tokens[0].value + EVENING_SHIFT))


def _weekday_evening(tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
    # sat 7 in the evening
    d = next_weekday(currently.date, tokens[0].weekday)
    return combine(_at_hour(_on_date(d), tokens[1].value + EVENING_SHIFT))


# --- Catalogue ---

M = TokenKind.MONTH.value
N = TokenKind.NUMBER.value
T = TokenKind.CLOCK_TIME.value
D = TokenKind.WEEKDAY.value


def _w(text: str) -> str:
    return f"word:{text}"


CATALOGUE: tuple[Pattern, ...] = (
    Pattern((M, N), _month_day, "aug 2"),
    Pattern((M, N, T), _month_day, "aug 2 9am"),
    Pattern((M, N, _w("at"), T), _month_day, "aug 2 at 9am"),
    Pattern((N, M), _day_month, "2 aug"),
    Pattern((N, M, T), _day_month, "2 aug 9am"),
    Pattern((N, M, _w("at"), T), _day_month, "2 aug at 9am"),
    Pattern((N, _w("of"), M), _day_of_month, "2nd of aug"),
    Pattern((N, _w("of"), M, T), _day_of_month, "2nd of aug 9am"),
    Pattern((N, _w("of"), M, _w("at"), T), _day_of_month, "2nd of aug at 9am"),
    Pattern((T,), _time_today, "9:30am"),
    Pattern((N, _w("to"), N), _minutes_to_hour, "10 to 8"),
    Pattern((N, _w("to"), T), _minutes_to_time, "10 to 8am"),
    Pattern((_w("half"), _w("past"), N), _half_past, "half past 2"),
    Pattern((_w("yesterday"), T), _yesterday, "yesterday 9am"),
    Pattern((_w("yesterday"), _w("at"), T), _yesterday, "yesterday at 9am"),
    Pattern((_w("tomorrow"), T), _tomorrow, "tomorrow 9am"),
    Pattern((_w("tomorrow"), _w("at"), T), _tomorrow, "tomorrow at 9am"),
    Pattern((_w("today"), T), _time_today, "today 9am"),
    Pattern((_w("today"), _w("at"), T), _time_today, "today at 9am"),
    Pattern((D,), _weekday_noon, "tuesday"),
    Pattern((D, T), _weekday_at_time, "tuesday 9am"),
    Pattern((D, _w("at"), T), _weekday_at_time, "tuesday at 9am"),
    Pattern((N, _w("in"), _w("the"), _w("morning")), _morning, "6 in the morning"),
    Pattern((N, _w("in"), _w("the"), _w("evening")), _evening, "6 in the evening"),
    Pattern((D, N, _w("in"), _w("the"), _w("evening")), _weekday_evening, "sat 7 in the evening"),
)


class GrammarResolver:
    """
    Resolves token sequences against an ordered pattern catalogue.

    Holds no state between calls; one instance may be shared freely.
    """

    def __init__(self, catalogue: Sequence[Pattern] = CATALOGUE):
        self.catalogue = tuple(catalogue)

    def match(self, tokens: Sequence[Token]) -> Optional[Pattern]:
        shape = shape_of(tokens)
        for pattern in self.catalogue:
            if pattern.matches(shape):
                return pattern
        return None

    def resolve(self, tokens: Sequence[Token], currently: CurrentInstant) -> datetime:
        """
        Resolve tokens to a timestamp.

        Raises:
            UnknownFormatError: empty sequence or no pattern matched.
            CalendarInvalidError: the matched pattern produced an impossible date.
        """
        if not tokens:
            raise UnknownFormatError("Empty token sequence")

        pattern = self.match(tokens)
        if pattern is None:
            logger.debug("No pattern for shape %s", shape_of(tokens))
            raise UnknownFormatError(f"No pattern for shape {shape_of(tokens)}")

        logger.debug("Matched pattern %r (shape %s)", pattern.example, pattern.shape)
        return pattern.handler(tokens, currently)
