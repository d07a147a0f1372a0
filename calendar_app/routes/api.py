from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from calendar_app.config import DEFAULT_NOTIFICATION_MINUTES
from calendar_app.db import get_db_session
from calendar_app.models import Event
from calendar_app.services.calendar_views_service import (
    CalendarEventView,
    MonthView,
    WeekView,
    get_month_view,
    get_week_view,
)
from calendar_app.services.events_service import (
    CreateEventInput,
    EventNotFoundError,
    EventValidationError,
    UpdateEventInput,
    create_event,
    delete_event_series,
    delete_single_event,
    get_event,
    list_events,
    make_event_recurring,
    update_event_series,
    update_single_event,
)
from calendar_app.services.recurrence_engine import RecurrenceInputError, generate_repeat_dates
from calendar_app.services.scheduling_service import RepeatSpec

api_router = APIRouter(tags=["api"])


class RepeatRequest(BaseModel):
    type: str = "none"
    interval: int = 1
    end_date: date | None = None


class EventRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    date: date
    start_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    description: str = ""
    location: str = Field(default="", max_length=255)
    category: str = Field(default="", max_length=64)
    notification_time: int = Field(default=DEFAULT_NOTIFICATION_MINUTES, ge=0)
    repeat: RepeatRequest = Field(default_factory=RepeatRequest)


class RecurrencePreviewRequest(BaseModel):
    start_date: str
    type: str
    interval: int = 1
    end_date: str | None = None


class EventResponse(BaseModel):
    id: int
    title: str
    date: date
    start_time: str
    end_time: str
    description: str
    location: str
    category: str
    notification_time: int
    repeat: RepeatRequest
    repeat_id: str | None

    @classmethod
    def from_model(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id,
            title=event.title,
            date=event.event_date,
            start_time=event.start_time,
            end_time=event.end_time,
            description=event.description,
            location=event.location,
            category=event.category,
            notification_time=event.notification_time,
            repeat=RepeatRequest(
                type=event.repeat_type,
                interval=event.repeat_interval,
                end_date=event.repeat_end_date,
            ),
            repeat_id=event.repeat_id,
        )


def _update_input(payload: EventRequest) -> UpdateEventInput:
    return UpdateEventInput(
        title=payload.title,
        event_date=payload.date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        description=payload.description,
        location=payload.location,
        category=payload.category,
        notification_time=payload.notification_time,
    )


def _repeat_spec(payload: EventRequest) -> RepeatSpec:
    return RepeatSpec(
        repeat_type=payload.repeat.type,
        interval=payload.repeat.interval,
        end_date=payload.repeat.end_date,
    )


def _serialize_series(repeat_id: str | None, events: list[Event]) -> dict[str, object]:
    return {
        "repeat_id": repeat_id,
        "events": [EventResponse.from_model(event).model_dump(mode="json") for event in events],
    }


def _serialize_event_view(row: CalendarEventView) -> dict[str, object]:
    return {
        "event_id": row.event_id,
        "title": row.title,
        "date": row.event_date.isoformat(),
        "start_time": row.start_time,
        "end_time": row.end_time,
        "category": row.category,
        "repeat_type": row.repeat_type,
        "repeat_id": row.repeat_id,
        "is_recurring": row.is_recurring,
    }


def _serialize_month_view(view: MonthView) -> dict[str, object]:
    return {
        "label": view.label,
        "year": view.year,
        "month": view.month,
        "event_count": view.event_count,
        "weeks": [
            [
                None
                if cell is None
                else {"day": cell.day, "events": [_serialize_event_view(row) for row in cell.events]}
                for cell in week
            ]
            for week in view.weeks
        ],
    }


def _serialize_week_view(view: WeekView) -> dict[str, object]:
    return {
        "label": view.label,
        "week_start": view.week_start.isoformat(),
        "week_end": view.week_end.isoformat(),
        "event_count": view.event_count,
        "days": [
            {
                "date": column.day.isoformat(),
                "events": [_serialize_event_view(row) for row in column.events],
            }
            for column in view.days
        ],
    }


@api_router.get("/health")
def health_check(db: Session = Depends(get_db_session)) -> dict[str, str]:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=503, detail="database unavailable") from exc
    return {"status": "ok"}


@api_router.get("/events")
def events_list(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    events = list_events(db, start=start, end=end)
    return {"events": [EventResponse.from_model(event).model_dump(mode="json") for event in events]}


@api_router.post("/events", status_code=201)
def events_create(payload: EventRequest, db: Session = Depends(get_db_session)) -> dict[str, object]:
    try:
        result = create_event(
            db,
            CreateEventInput(
                title=payload.title,
                event_date=payload.date,
                start_time=payload.start_time,
                end_time=payload.end_time,
                description=payload.description,
                location=payload.location,
                category=payload.category,
                notification_time=payload.notification_time,
                repeat_type=payload.repeat.type,
                repeat_interval=payload.repeat.interval,
                repeat_end_date=payload.repeat.end_date,
            ),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_series(result.repeat_id, result.events)


@api_router.get("/events/{event_id}", response_model=EventResponse)
def events_get(event_id: int, db: Session = Depends(get_db_session)) -> EventResponse:
    try:
        event = get_event(db, event_id)
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return EventResponse.from_model(event)


@api_router.put("/events/{event_id}", response_model=EventResponse)
def events_update_single(
    event_id: int,
    payload: EventRequest,
    db: Session = Depends(get_db_session),
) -> EventResponse:
    try:
        if payload.repeat.type != "none":
            result = make_event_recurring(
                db,
                event_id=event_id,
                data=_update_input(payload),
                repeat=_repeat_spec(payload),
            )
            event = result.events[0]
        else:
            event = update_single_event(db, event_id=event_id, data=_update_input(payload))
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except EventValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return EventResponse.from_model(event)


@api_router.delete("/events/{event_id}", status_code=204)
def events_delete_single(event_id: int, db: Session = Depends(get_db_session)) -> Response:
    try:
        delete_single_event(db, event_id=event_id)
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)


@api_router.put("/recurring-events/{repeat_id}")
def recurring_events_update(
    repeat_id: str,
    payload: EventRequest,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    try:
        result = update_event_series(
            db,
            repeat_id=repeat_id,
            data=_update_input(payload),
            repeat=_repeat_spec(payload),
        )
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_series(result.repeat_id, result.events)


@api_router.delete("/recurring-events/{repeat_id}")
def recurring_events_delete(repeat_id: str, db: Session = Depends(get_db_session)) -> dict[str, object]:
    try:
        deleted_count = delete_event_series(db, repeat_id=repeat_id)
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"repeat_id": repeat_id, "deleted_count": deleted_count}


@api_router.post("/recurrence/preview")
def recurrence_preview(payload: RecurrencePreviewRequest) -> dict[str, object]:
    try:
        dates = generate_repeat_dates(payload.start_date, payload.type, payload.interval, payload.end_date)
    except RecurrenceInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"dates": dates, "count": len(dates)}


@api_router.get("/views/month")
def month_view_api(
    target: date | None = Query(default=None),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    return _serialize_month_view(get_month_view(db, target=target or date.today()))


@api_router.get("/views/week")
def week_view_api(
    target: date | None = Query(default=None),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    return _serialize_week_view(get_week_view(db, target=target or date.today()))
