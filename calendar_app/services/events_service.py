from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
import re

from sqlalchemy import select
from sqlalchemy.orm import Session

from calendar_app.config import DEFAULT_NOTIFICATION_MINUTES
from calendar_app.models.events import Event
from calendar_app.services.recurrence_engine import REPEAT_TYPES
from calendar_app.services.scheduling_service import (
    EventDraft,
    EventSeed,
    RepeatSpec,
    build_event_seeds,
)

logger = logging.getLogger(__name__)


_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class EventValidationError(ValueError):
    pass


class EventNotFoundError(EventValidationError):
    pass


@dataclass(frozen=True)
class CreateEventInput:
    title: str
    event_date: date
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    notification_time: int = DEFAULT_NOTIFICATION_MINUTES
    repeat_type: str = "none"
    repeat_interval: int = 1
    repeat_end_date: date | None = None


@dataclass(frozen=True)
class UpdateEventInput:
    title: str
    event_date: date
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    notification_time: int = DEFAULT_NOTIFICATION_MINUTES


@dataclass(frozen=True)
class EventSeriesResult:
    repeat_id: str | None
    events: list[Event]


def _validate_event_fields(*, title: str, start_time: str, end_time: str, notification_time: int) -> None:
    if not title.strip():
        raise EventValidationError("title must not be empty")
    for label, value in (("start_time", start_time), ("end_time", end_time)):
        if not _TIME_RE.match(value):
            raise EventValidationError(f"{label} must be HH:MM, got {value!r}")
    if start_time >= end_time:
        raise EventValidationError("start_time must be earlier than end_time")
    if notification_time < 0:
        raise EventValidationError("notification_time must be non-negative")


def _validate_repeat(repeat: RepeatSpec, start: date) -> None:
    if repeat.repeat_type not in REPEAT_TYPES:
        raise EventValidationError(f"Unsupported repeat_type: {repeat.repeat_type}")
    if repeat.interval < 1:
        raise EventValidationError("repeat_interval must be >= 1")
    if repeat.end_date is not None and repeat.end_date < start:
        raise EventValidationError("repeat_end_date must not be before the event date")


def _draft_from(data: CreateEventInput | UpdateEventInput) -> EventDraft:
    return EventDraft(
        title=data.title.strip(),
        event_date=data.event_date,
        start_time=data.start_time,
        end_time=data.end_time,
        description=data.description,
        location=data.location,
        category=data.category,
        notification_time=data.notification_time,
    )


def _seed_to_event(seed: EventSeed) -> Event:
    return Event(
        title=seed.draft.title,
        event_date=seed.event_date,
        start_time=seed.draft.start_time,
        end_time=seed.draft.end_time,
        description=seed.draft.description,
        location=seed.draft.location,
        category=seed.draft.category,
        notification_time=seed.draft.notification_time,
        repeat_type=seed.repeat.repeat_type,
        repeat_interval=seed.repeat.interval,
        repeat_end_date=seed.repeat.end_date,
        repeat_id=seed.repeat_id,
    )


def _materialize(session: Session, seeds: list[EventSeed]) -> list[Event]:
    rows = [_seed_to_event(seed) for seed in seeds]
    session.add_all(rows)
    session.commit()
    for row in rows:
        session.refresh(row)
    return rows


def _series_rows(session: Session, repeat_id: str) -> list[Event]:
    stmt = select(Event).where(Event.repeat_id == repeat_id).order_by(Event.event_date.asc(), Event.id.asc())
    return list(session.scalars(stmt).all())


def get_event(session: Session, event_id: int) -> Event:
    event = session.get(Event, event_id)
    if event is None:
        raise EventNotFoundError(f"Event {event_id} not found")
    return event


def list_events(
    session: Session,
    *,
    start: date | None = None,
    end: date | None = None,
    repeat_id: str | None = None,
) -> list[Event]:
    stmt = select(Event)
    if start is not None:
        stmt = stmt.where(Event.event_date >= start)
    if end is not None:
        stmt = stmt.where(Event.event_date <= end)
    if repeat_id is not None:
        stmt = stmt.where(Event.repeat_id == repeat_id)
    stmt = stmt.order_by(Event.event_date.asc(), Event.start_time.asc(), Event.id.asc())
    return list(session.scalars(stmt).all())


def create_event(session: Session, data: CreateEventInput) -> EventSeriesResult:
    _validate_event_fields(
        title=data.title,
        start_time=data.start_time,
        end_time=data.end_time,
        notification_time=data.notification_time,
    )
    repeat = RepeatSpec(
        repeat_type=data.repeat_type,
        interval=data.repeat_interval,
        end_date=data.repeat_end_date,
    )
    _validate_repeat(repeat, data.event_date)

    # Overlapping events are allowed; no conflict check is made here.
    seeds = build_event_seeds(draft=_draft_from(data), repeat=repeat)
    rows = _materialize(session, seeds)
    repeat_id = seeds[0].repeat_id if seeds else None
    logger.info(
        "Event created title=%s repeat_type=%s interval=%s repeat_id=%s occurrences=%s",
        data.title.strip(),
        repeat.repeat_type,
        repeat.interval,
        repeat_id,
        len(rows),
    )
    return EventSeriesResult(repeat_id=repeat_id, events=rows)


def update_single_event(session: Session, *, event_id: int, data: UpdateEventInput) -> Event:
    _validate_event_fields(
        title=data.title,
        start_time=data.start_time,
        end_time=data.end_time,
        notification_time=data.notification_time,
    )
    event = get_event(session, event_id)
    previous_repeat_id = event.repeat_id

    event.title = data.title.strip()
    event.event_date = data.event_date
    event.start_time = data.start_time
    event.end_time = data.end_time
    event.description = data.description
    event.location = data.location
    event.category = data.category
    event.notification_time = data.notification_time
    # An individually edited occurrence leaves its series.
    event.repeat_type = "none"
    event.repeat_interval = 1
    event.repeat_end_date = None
    event.repeat_id = None

    session.commit()
    session.refresh(event)
    logger.info(
        "Event updated individually event_id=%s detached_from_repeat_id=%s",
        event.id,
        previous_repeat_id,
    )
    return event


def make_event_recurring(
    session: Session,
    *,
    event_id: int,
    data: UpdateEventInput,
    repeat: RepeatSpec,
) -> EventSeriesResult:
    _validate_event_fields(
        title=data.title,
        start_time=data.start_time,
        end_time=data.end_time,
        notification_time=data.notification_time,
    )
    _validate_repeat(repeat, data.event_date)
    if not repeat.is_recurring:
        raise EventValidationError("make_event_recurring needs a repeating repeat_type")

    event = get_event(session, event_id)
    if event.repeat_id is not None:
        raise EventValidationError(
            f"Event {event_id} belongs to series {event.repeat_id}; change its repeat rule through the series"
        )

    session.delete(event)
    session.flush()

    seeds = build_event_seeds(draft=_draft_from(data), repeat=repeat)
    rows = _materialize(session, seeds)
    repeat_id = seeds[0].repeat_id
    logger.info(
        "Event converted to series event_id=%s repeat_type=%s interval=%s repeat_id=%s occurrences=%s",
        event_id,
        repeat.repeat_type,
        repeat.interval,
        repeat_id,
        len(rows),
    )
    return EventSeriesResult(repeat_id=repeat_id, events=rows)


def update_event_series(
    session: Session,
    *,
    repeat_id: str,
    data: UpdateEventInput,
    repeat: RepeatSpec,
) -> EventSeriesResult:
    _validate_event_fields(
        title=data.title,
        start_time=data.start_time,
        end_time=data.end_time,
        notification_time=data.notification_time,
    )
    _validate_repeat(repeat, data.event_date)
    if not repeat.is_recurring:
        raise EventValidationError("A series update needs a repeating repeat_type")

    existing_rows = _series_rows(session, repeat_id)
    if not existing_rows:
        raise EventNotFoundError(f"Series {repeat_id} not found")

    for row in existing_rows:
        session.delete(row)
    session.flush()

    seeds = build_event_seeds(draft=_draft_from(data), repeat=repeat, repeat_id=repeat_id)
    rows = _materialize(session, seeds)
    logger.info(
        "Event series updated repeat_id=%s deleted=%s generated=%s",
        repeat_id,
        len(existing_rows),
        len(rows),
    )
    return EventSeriesResult(repeat_id=repeat_id, events=rows)


def delete_single_event(session: Session, *, event_id: int) -> None:
    event = get_event(session, event_id)
    repeat_id = event.repeat_id
    session.delete(event)
    session.commit()
    logger.info("Event deleted event_id=%s repeat_id=%s", event_id, repeat_id)


def delete_event_series(session: Session, *, repeat_id: str) -> int:
    rows = _series_rows(session, repeat_id)
    if not rows:
        raise EventNotFoundError(f"Series {repeat_id} not found")

    for row in rows:
        session.delete(row)
    session.commit()
    logger.info("Event series deleted repeat_id=%s deleted=%s", repeat_id, len(rows))
    return len(rows)
