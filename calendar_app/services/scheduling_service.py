from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date

from calendar_app.config import DEFAULT_NOTIFICATION_MINUTES
from calendar_app.services.date_utils import parse_date
from calendar_app.services.recurrence_engine import DEFAULT_REPEAT_INTERVAL, generate_repeat_dates


@dataclass(frozen=True)
class EventDraft:
    title: str
    event_date: date
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    category: str = ""
    notification_time: int = DEFAULT_NOTIFICATION_MINUTES


@dataclass(frozen=True)
class RepeatSpec:
    repeat_type: str = "none"
    interval: int = DEFAULT_REPEAT_INTERVAL
    end_date: date | None = None

    @property
    def is_recurring(self) -> bool:
        return self.repeat_type != "none"


@dataclass(frozen=True)
class EventSeed:
    draft: EventDraft
    event_date: date
    repeat: RepeatSpec
    repeat_id: str | None


def new_repeat_id() -> str:
    return uuid.uuid4().hex


def build_event_seeds(
    *,
    draft: EventDraft,
    repeat: RepeatSpec,
    repeat_id: str | None = None,
) -> list[EventSeed]:
    if not repeat.is_recurring:
        return [EventSeed(draft=draft, event_date=draft.event_date, repeat=repeat, repeat_id=None)]

    series_id = repeat_id or new_repeat_id()
    occurrence_dates = generate_repeat_dates(
        draft.event_date,
        repeat.repeat_type,
        repeat.interval,
        repeat.end_date,
    )
    return [
        EventSeed(
            draft=draft,
            event_date=parse_date(value),
            repeat=repeat,
            repeat_id=series_id,
        )
        for value in occurrence_dates
    ]
