from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from calendar_app.models import Event
from calendar_app.services.date_utils import (
    days_in_month,
    format_month,
    format_week,
    get_events_for_day,
    get_week_dates,
    get_weeks_at_month,
)
from calendar_app.services.events_service import list_events


@dataclass(frozen=True)
class CalendarEventView:
    event_id: int
    title: str
    event_date: date
    start_time: str
    end_time: str
    category: str
    repeat_type: str
    repeat_id: str | None
    is_recurring: bool


@dataclass(frozen=True)
class DayCell:
    day: int
    events: list[CalendarEventView]


@dataclass(frozen=True)
class MonthView:
    label: str
    year: int
    month: int
    weeks: list[list[DayCell | None]]
    event_count: int


@dataclass(frozen=True)
class DayColumn:
    day: date
    events: list[CalendarEventView]


@dataclass(frozen=True)
class WeekView:
    label: str
    week_start: date
    week_end: date
    days: list[DayColumn]
    event_count: int


def _to_view(event: Event) -> CalendarEventView:
    return CalendarEventView(
        event_id=event.id,
        title=event.title,
        event_date=event.event_date,
        start_time=event.start_time,
        end_time=event.end_time,
        category=event.category,
        repeat_type=event.repeat_type,
        repeat_id=event.repeat_id,
        is_recurring=event.is_recurring,
    )


def get_month_view(session: Session, *, target: date) -> MonthView:
    month_start = date(target.year, target.month, 1)
    month_end = date(target.year, target.month, days_in_month(target.year, target.month))
    events = list_events(session, start=month_start, end=month_end)

    weeks: list[list[DayCell | None]] = []
    for week in get_weeks_at_month(target):
        weeks.append(
            [
                None
                if day is None
                else DayCell(day=day, events=[_to_view(event) for event in get_events_for_day(events, day)])
                for day in week
            ]
        )

    return MonthView(
        label=format_month(target),
        year=target.year,
        month=target.month,
        weeks=weeks,
        event_count=len(events),
    )


def get_week_view(session: Session, *, target: date) -> WeekView:
    week_dates = get_week_dates(target)
    week_start, week_end = week_dates[0], week_dates[-1]
    events = list_events(session, start=week_start, end=week_end)

    days = [
        DayColumn(
            day=day,
            events=[_to_view(event) for event in events if event.event_date == day],
        )
        for day in week_dates
    ]
    return WeekView(
        label=format_week(target),
        week_start=week_start,
        week_end=week_end,
        days=days,
        event_count=len(events),
    )
