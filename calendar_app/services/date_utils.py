from __future__ import annotations

import calendar
import re
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Protocol, TypeVar


_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateError(ValueError):
    pass


class _HasDate(Protocol):
    event_date: date


EventT = TypeVar("EventT", bound=_HasDate)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(year: int, month: int, offset: int) -> tuple[int, int]:
    zero_based = (year * 12 + (month - 1)) + offset
    return zero_based // 12, (zero_based % 12) + 1


def add_years(value: date, years: int) -> date:
    """Shift ``value`` by whole years, keeping month and day.

    Feb 29 has no counterpart in a common year, so it overflows to Mar 1.
    """
    year = value.year + years
    if value.month == 2 and value.day == 29 and not is_leap_year(year):
        return date(year, 3, 1)
    return value.replace(year=year)


def parse_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise InvalidDateError(f"Expected a YYYY-MM-DD date, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid calendar date: {value}") from exc


def fill_zero(value: int, size: int = 2) -> str:
    return str(value).rjust(size, "0")


def format_date(value: date, day: int | None = None) -> str:
    return "-".join(
        [
            str(value.year),
            fill_zero(value.month),
            fill_zero(day if day is not None else value.day),
        ]
    )


def _sunday_based_weekday(value: date) -> int:
    # date.weekday() is Monday=0; calendar grids here start on Sunday.
    return (value.weekday() + 1) % 7


def get_week_dates(value: date) -> list[date]:
    sunday = value - timedelta(days=_sunday_based_weekday(value))
    return [sunday + timedelta(days=offset) for offset in range(7)]


def get_weeks_at_month(value: date) -> list[list[int | None]]:
    total_days = days_in_month(value.year, value.month)
    first_weekday = _sunday_based_weekday(date(value.year, value.month, 1))

    weeks: list[list[int | None]] = []
    week: list[int | None] = [None] * 7
    for day in range(1, total_days + 1):
        index = (first_weekday + day - 1) % 7
        week[index] = day
        if index == 6 or day == total_days:
            weeks.append(week)
            week = [None] * 7
    return weeks


def format_week(value: date) -> str:
    # A week belongs to the month its Thursday falls in.
    thursday = value + timedelta(days=4 - _sunday_based_weekday(value))
    first_of_month = date(thursday.year, thursday.month, 1)
    first_thursday = first_of_month + timedelta(days=(4 - _sunday_based_weekday(first_of_month)) % 7)
    week_number = (thursday - first_thursday).days // 7 + 1
    return f"{thursday.year}년 {thursday.month}월 {week_number}주"


def format_month(value: date) -> str:
    return f"{value.year}년 {value.month}월"


def get_events_for_day(events: Iterable[EventT], day: int) -> list[EventT]:
    return [event for event in events if event.event_date.day == day]

