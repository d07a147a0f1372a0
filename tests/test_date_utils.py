from dataclasses import dataclass
from datetime import date, datetime

import pytest

from calendar_app.services.date_utils import (
    InvalidDateError,
    add_years,
    days_in_month,
    fill_zero,
    format_date,
    format_month,
    format_week,
    get_events_for_day,
    get_week_dates,
    get_weeks_at_month,
    is_leap_year,
    parse_date,
)


@dataclass(frozen=True)
class _StubEvent:
    title: str
    event_date: date


def test_leap_years_and_month_lengths() -> None:
    assert is_leap_year(2024)
    assert is_leap_year(2000)
    assert not is_leap_year(1900)
    assert not is_leap_year(2025)

    assert days_in_month(2025, 1) == 31
    assert days_in_month(2025, 2) == 28
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2025, 4) == 30
    assert days_in_month(2025, 12) == 31


def test_add_years_rolls_feb_29_forward() -> None:
    assert add_years(date(2025, 7, 10), 1) == date(2026, 7, 10)
    assert add_years(date(2024, 2, 29), 1) == date(2025, 3, 1)
    assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)


def test_parse_and_format_dates() -> None:
    assert parse_date("2025-10-01") == date(2025, 10, 1)
    assert parse_date(date(2025, 10, 1)) == date(2025, 10, 1)
    assert parse_date(datetime(2025, 10, 1, 15, 30)) == date(2025, 10, 1)
    for bad in ("2025-1-01", "20251001", "2025-13-01", "", "2025-10-01T00:00"):
        with pytest.raises(InvalidDateError):
            parse_date(bad)

    assert fill_zero(5) == "05"
    assert fill_zero(12) == "12"
    assert fill_zero(7, 3) == "007"
    assert format_date(date(2025, 3, 9)) == "2025-03-09"
    assert format_date(date(2025, 3, 9), day=21) == "2025-03-21"


def test_week_dates_start_on_sunday() -> None:
    week = get_week_dates(date(2025, 10, 1))  # Wednesday
    assert week[0] == date(2025, 9, 28)
    assert week[-1] == date(2025, 10, 4)
    assert len(week) == 7
    assert get_week_dates(date(2025, 9, 28))[0] == date(2025, 9, 28)


def test_weeks_at_month_grid() -> None:
    weeks = get_weeks_at_month(date(2025, 10, 15))
    assert weeks[0] == [None, None, None, 1, 2, 3, 4]
    assert weeks[-1] == [26, 27, 28, 29, 30, 31, None]
    assert len(weeks) == 5
    assert [day for week in weeks for day in week if day is not None] == list(range(1, 32))

    february = get_weeks_at_month(date(2026, 2, 1))  # starts on Sunday, 28 days
    assert len(february) == 4
    assert february[0] == [1, 2, 3, 4, 5, 6, 7]


def test_format_week_and_month_labels() -> None:
    assert format_month(date(2025, 10, 1)) == "2025년 10월"
    assert format_week(date(2025, 10, 1)) == "2025년 10월 1주"
    assert format_week(date(2025, 10, 15)) == "2025년 10월 3주"
    # Thursday of this week is already in October.
    assert format_week(date(2025, 9, 28)) == "2025년 10월 1주"
    # Thursday of this week is still in December.
    assert format_week(date(2025, 12, 31)) == "2026년 1월 1주"


def test_events_for_day_filters_by_day_of_month() -> None:
    events = [
        _StubEvent("Standup", date(2025, 10, 1)),
        _StubEvent("Review", date(2025, 10, 15)),
        _StubEvent("Retro", date(2025, 10, 1)),
    ]
    assert [event.title for event in get_events_for_day(events, 1)] == ["Standup", "Retro"]
    assert get_events_for_day(events, 2) == []
