"""
Date-boundary utilities

Pure helpers shared by the statistics aggregators. All values are naive local
datetimes; aware inputs are converted to local time first.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Union

DateLike = Union[date, datetime, str]

MONDAY = 0
SUNDAY = 6


def to_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    """Normalize a date, datetime or ISO string into a naive local datetime"""
    if value is None or value == "":
        return None

    if isinstance(value, str):
        text = value.strip()
        # fromisoformat() before 3.11 rejects a trailing "Z"
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    return datetime.combine(value, time.min)


def start_of_day(d: datetime) -> datetime:
    return d.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(d: datetime) -> datetime:
    return d.replace(hour=23, minute=59, second=59, microsecond=0)


def start_of_week(d: datetime, week_starts_on: int = MONDAY) -> datetime:
    """Midnight of the first day of ``d``'s week.

    ``week_starts_on`` follows ``datetime.weekday()`` numbering, so with the
    default Monday start a Sunday belongs to the week that began six days
    earlier.
    """
    offset = (d.weekday() - week_starts_on) % 7
    return start_of_day(d - timedelta(days=offset))


def end_of_week(d: datetime, week_starts_on: int = MONDAY) -> datetime:
    last_day = start_of_week(d, week_starts_on) + timedelta(days=6)
    return last_day.replace(hour=23, minute=59, second=59, microsecond=999000)


def start_of_month(d: datetime) -> datetime:
    return start_of_day(d.replace(day=1))


def end_of_month(d: datetime) -> datetime:
    if d.month == 12:
        first_of_next = d.replace(year=d.year + 1, month=1, day=1)
    else:
        first_of_next = d.replace(month=d.month + 1, day=1)
    return end_of_day(first_of_next - timedelta(days=1))


def day_after(d: datetime) -> datetime:
    return start_of_day(d + timedelta(days=1))


def in_range(d: datetime, start: datetime, end: datetime) -> bool:
    """Inclusive on both ends"""
    return start <= d <= end


def each_day(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive"""
    current = to_datetime(start).date()
    last = to_datetime(end).date()
    while current <= last:
        yield current
        current += timedelta(days=1)


def year_bounds(year: int):
    """First and last calendar day of ``year``"""
    return date(year, 1, 1), date(year, 12, 31)
