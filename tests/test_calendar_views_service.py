from __future__ import annotations

from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

import calendar_app.models  # noqa: F401
from calendar_app.models.base import Base
from calendar_app.services.calendar_views_service import get_month_view, get_week_view
from calendar_app.services.events_service import CreateEventInput, create_event


def _make_session(tmp_path) -> Session:
    db_path = tmp_path / "calendar_views.db"
    engine = create_engine(f"sqlite:///{db_path}", future=True)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    return SessionLocal()


def _seed(session: Session) -> None:
    create_event(
        session,
        CreateEventInput(
            title="Standup",
            event_date=date(2025, 10, 1),
            start_time="09:00",
            end_time="09:15",
            repeat_type="weekly",
            repeat_end_date=date(2025, 11, 30),
        ),
    )
    create_event(
        session,
        CreateEventInput(
            title="Dentist",
            event_date=date(2025, 10, 2),
            start_time="16:00",
            end_time="17:00",
        ),
    )


def test_month_view_places_events_on_their_days(tmp_path) -> None:
    session = _make_session(tmp_path)
    try:
        _seed(session)
        view = get_month_view(session, target=date(2025, 10, 20))

        assert view.label == "2025년 10월"
        assert (view.year, view.month) == (2025, 10)
        assert view.event_count == 6
        assert view.weeks[0][0] is None
        first_day = view.weeks[0][3]
        assert first_day is not None and first_day.day == 1
        assert [event.title for event in first_day.events] == ["Standup"]
        assert first_day.events[0].is_recurring is True

        second_day = view.weeks[0][4]
        assert [event.title for event in second_day.events] == ["Dentist"]
        assert second_day.events[0].is_recurring is False

        standup_days = [
            cell.day
            for week in view.weeks
            for cell in week
            if cell is not None and any(event.title == "Standup" for event in cell.events)
        ]
        assert standup_days == [1, 8, 15, 22, 29]
    finally:
        session.close()


def test_week_view_covers_sunday_to_saturday(tmp_path) -> None:
    session = _make_session(tmp_path)
    try:
        _seed(session)
        view = get_week_view(session, target=date(2025, 10, 1))

        assert view.label == "2025년 10월 1주"
        assert view.week_start == date(2025, 9, 28)
        assert view.week_end == date(2025, 10, 4)
        assert [column.day for column in view.days][0] == date(2025, 9, 28)
        assert view.event_count == 2
        titles_by_day = {column.day: [event.title for event in column.events] for column in view.days}
        assert titles_by_day[date(2025, 10, 1)] == ["Standup"]
        assert titles_by_day[date(2025, 10, 2)] == ["Dentist"]
        assert titles_by_day[date(2025, 9, 28)] == []
    finally:
        session.close()
