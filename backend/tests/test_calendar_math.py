from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from phrasetime.core.calendar_math import (
    FieldSet,
    add_seconds,
    combine,
    days_in_month,
    next_weekday,
)
from phrasetime.core.errors import CalendarInvalidError


def test_next_weekday_is_strictly_after_and_within_a_week():
    start = date(2016, 1, 1)
    for offset in range(14):
        d = start + timedelta(days=offset)
        for weekday in range(7):
            found = next_weekday(d, weekday)
            assert found.weekday() == weekday
            assert d < found <= d + timedelta(days=7)


def test_next_weekday_skips_the_same_day():
    # 2016-01-01 is a Friday.
    assert next_weekday(date(2016, 1, 1), 4) == date(2016, 1, 8)
    assert next_weekday(date(2016, 1, 1), 5) == date(2016, 1, 2)


def test_next_weekday_crosses_year_boundary():
    # 2015-12-31 is a Thursday; next Monday is in January.
    assert next_weekday(date(2015, 12, 31), 0) == date(2016, 1, 4)


def test_next_weekday_rejects_bad_weekday():
    with pytest.raises(ValueError):
        next_weekday(date(2016, 1, 1), 7)


@pytest.mark.parametrize(
    "start, expected",
    [
        (datetime(2016, 1, 31, 12), datetime(2016, 2, 1, 12)),
        (datetime(2016, 4, 30, 0), datetime(2016, 5, 1, 0)),
        (datetime(2015, 12, 31, 23, 30), datetime(2016, 1, 1, 23, 30)),
        (datetime(2016, 2, 28), datetime(2016, 2, 29)),
        (datetime(2015, 2, 28), datetime(2015, 3, 1)),
    ],
)
def test_add_day_rolls_over_months_and_years(start, expected):
    assert add_seconds(start, 86400) == expected


def test_negative_shift_rolls_back():
    assert add_seconds(datetime(2016, 1, 1, 0, 5), -600) == datetime(2015, 12, 31, 23, 55)
    assert add_seconds(datetime(2016, 3, 1), -86400) == datetime(2016, 2, 29)


@pytest.mark.parametrize("delta", [0, 1, 59, 3600, 86400, 86400 * 45, 10**7])
def test_shift_back_then_forward_is_identity(delta):
    ts = combine(FieldSet(year=2016, month=8, day=2, hour=9, minute=15, second=0, microsecond=0))
    assert add_seconds(add_seconds(ts, -delta), delta) == ts


def test_shift_past_supported_range_is_calendar_invalid():
    with pytest.raises(CalendarInvalidError):
        add_seconds(datetime(9999, 12, 31, 23), 86400)


def test_combine_builds_timestamp():
    fs = FieldSet(year=2016, month=2, day=29, hour=23, minute=59, second=59, microsecond=999999)
    assert combine(fs) == datetime(2016, 2, 29, 23, 59, 59, 999999)


@pytest.mark.parametrize(
    "fields",
    [
        dict(year=2016, month=2, day=30, hour=0, minute=0, second=0, microsecond=0),
        dict(year=2015, month=2, day=29, hour=0, minute=0, second=0, microsecond=0),
        dict(year=2016, month=4, day=31, hour=0, minute=0, second=0, microsecond=0),
        dict(year=2016, month=13, day=1, hour=0, minute=0, second=0, microsecond=0),
        dict(year=2016, month=1, day=0, hour=0, minute=0, second=0, microsecond=0),
        dict(year=2016, month=1, day=1, hour=24, minute=0, second=0, microsecond=0),
        dict(year=2016, month=1, day=1, hour=0, minute=60, second=0, microsecond=0),
        dict(year=2016, month=1, day=1, hour=10**20, minute=0, second=0, microsecond=0),
        dict(year=2016, month=1, day=1, hour=0, minute=0, second=10**20, microsecond=0),
    ],
)
def test_combine_never_clamps(fields):
    with pytest.raises(CalendarInvalidError):
        combine(FieldSet(**fields))


def test_combine_requires_all_fields():
    with pytest.raises(CalendarInvalidError, match="hour"):
        combine(FieldSet(year=2016, month=1, day=1))


def test_fieldset_merged_returns_new_value():
    base = FieldSet(year=2016, month=1, day=1)
    merged = base.merged(hour=9, minute=0, second=0, microsecond=0)

    assert base.hour is None
    assert merged.hour == 9
    assert merged.missing() == []
    assert base.missing() == ["hour", "minute", "second", "microsecond"]


def test_days_in_month():
    assert days_in_month(2016, 2) == 29
    assert days_in_month(2015, 2) == 28
    assert days_in_month(2016, 12) == 31
