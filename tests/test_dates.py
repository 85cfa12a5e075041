# tests/test_dates.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from taskstats.core.stats.dates import (
    SUNDAY,
    day_after,
    each_day,
    end_of_day,
    end_of_month,
    end_of_week,
    in_range,
    start_of_day,
    start_of_month,
    start_of_week,
    to_datetime,
    year_bounds,
)


def test_day_bounds():
    d = datetime(2024, 6, 12, 15, 42, 7, 123456)
    assert start_of_day(d) == datetime(2024, 6, 12, 0, 0, 0)
    assert end_of_day(d) == datetime(2024, 6, 12, 23, 59, 59)


@pytest.mark.parametrize(
    "day",
    [
        datetime(2024, 6, 10, 0, 0),   # Monday
        datetime(2024, 6, 12, 10, 0),  # Wednesday
        datetime(2024, 6, 16, 23, 30),  # Sunday closes the week
    ],
)
def test_monday_based_week(day):
    assert start_of_week(day) == datetime(2024, 6, 10)
    assert end_of_week(day) == datetime(2024, 6, 16, 23, 59, 59, 999000)


def test_week_starting_sunday():
    sunday = datetime(2024, 6, 16, 9, 0)
    assert start_of_week(sunday, SUNDAY) == datetime(2024, 6, 16)
    assert start_of_week(datetime(2024, 6, 12), SUNDAY) == datetime(2024, 6, 9)


def test_week_across_year_boundary():
    assert start_of_week(datetime(2025, 1, 1)) == datetime(2024, 12, 30)
    assert end_of_week(datetime(2024, 12, 30)).date() == date(2025, 1, 5)


def test_month_bounds():
    assert start_of_month(datetime(2024, 2, 17, 8)) == datetime(2024, 2, 1)
    assert end_of_month(datetime(2024, 2, 17, 8)) == datetime(2024, 2, 29, 23, 59, 59)
    assert end_of_month(datetime(2023, 12, 5)) == datetime(2023, 12, 31, 23, 59, 59)


def test_day_after_truncates_to_midnight():
    assert day_after(datetime(2024, 6, 10, 18, 30)) == datetime(2024, 6, 11)
    assert day_after(datetime(2024, 12, 31, 23, 59)) == datetime(2025, 1, 1)


def test_in_range_is_inclusive():
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 2)
    assert in_range(start, start, end)
    assert in_range(end, start, end)
    assert not in_range(end + timedelta(microseconds=1), start, end)


def test_to_datetime_accepts_dates_and_strings():
    assert to_datetime(None) is None
    assert to_datetime("") is None
    assert to_datetime(date(2024, 3, 1)) == datetime(2024, 3, 1)
    assert to_datetime("2024-03-01") == datetime(2024, 3, 1)
    assert to_datetime("2024-03-01T12:30:00") == datetime(2024, 3, 1, 12, 30)


def test_to_datetime_strips_timezone():
    aware = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
    result = to_datetime(aware)
    assert result.tzinfo is None
    assert result == aware.astimezone().replace(tzinfo=None)
    assert to_datetime("2024-03-01T12:00:00Z") == result


def test_each_day_is_inclusive():
    days = list(each_day(datetime(2024, 2, 27, 18), datetime(2024, 3, 1, 1)))
    assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_year_bounds():
    first, last = year_bounds(2024)
    assert (first, last) == (date(2024, 1, 1), date(2024, 12, 31))
    assert len(list(each_day(first, last))) == 366
    assert len(list(each_day(*year_bounds(2023)))) == 365
