from __future__ import annotations

from collections.abc import Iterator
from datetime import date, timedelta

from calendar_app.services.date_utils import (
    InvalidDateError,
    add_months,
    add_years,
    days_in_month,
    format_date,
    parse_date,
)


REPEAT_TYPES = ("none", "daily", "weekly", "monthly", "yearly")
DEFAULT_REPEAT_INTERVAL = 1
# Series without an explicit end date stop this many years after the start.
DEFAULT_REPEAT_SPAN_YEARS = 1


class RecurrenceInputError(ValueError):
    pass


def default_end_bound(start: date) -> date:
    return add_years(start, DEFAULT_REPEAT_SPAN_YEARS)


def _validate_rule(repeat_type: str, interval: int) -> None:
    if repeat_type not in REPEAT_TYPES:
        raise RecurrenceInputError(f"Unsupported repeat_type: {repeat_type}")
    if isinstance(interval, bool) or not isinstance(interval, int):
        raise RecurrenceInputError(f"interval must be an integer, got {interval!r}")
    if interval < 1:
        raise RecurrenceInputError(f"interval must be >= 1, got {interval}")


def _parse(value: str | date, field_name: str) -> date:
    try:
        return parse_date(value)
    except InvalidDateError as exc:
        raise RecurrenceInputError(f"{field_name}: {exc}") from exc


def _monthly_step(cursor: date, anchor_day: int, interval: int) -> date:
    year, month = add_months(cursor.year, cursor.month, interval)
    return date(year, month, min(anchor_day, days_in_month(year, month)))


def _yearly_step(cursor: date, anchor_month: int, anchor_day: int, interval: int) -> date:
    year = cursor.year + interval
    return date(year, anchor_month, min(anchor_day, days_in_month(year, anchor_month)))


def _qualifies(repeat_type: str, cursor: date, anchor_month: int, anchor_day: int) -> bool:
    # Clamped cursors only position the next step; they never count as occurrences.
    if repeat_type == "monthly":
        return cursor.day == anchor_day
    if repeat_type == "yearly":
        return cursor.month == anchor_month and cursor.day == anchor_day
    return True


def iter_repeat_dates(
    start_date: str | date,
    repeat_type: str,
    interval: int = DEFAULT_REPEAT_INTERVAL,
    end_date: str | date | None = None,
) -> Iterator[date]:
    _validate_rule(repeat_type, interval)
    start = _parse(start_date, "start_date")
    end = _parse(end_date, "end_date") if end_date is not None else default_end_bound(start)

    if repeat_type == "none":
        yield start
        return

    anchor_day = start.day
    anchor_month = start.month
    cursor = start
    while cursor <= end:
        if _qualifies(repeat_type, cursor, anchor_month, anchor_day):
            yield cursor

        if repeat_type == "daily":
            cursor += timedelta(days=interval)
        elif repeat_type == "weekly":
            cursor += timedelta(days=7 * interval)
        elif repeat_type == "monthly":
            cursor = _monthly_step(cursor, anchor_day, interval)
        else:
            cursor = _yearly_step(cursor, anchor_month, anchor_day, interval)


def generate_repeat_dates(
    start_date: str | date,
    repeat_type: str,
    interval: int = DEFAULT_REPEAT_INTERVAL,
    end_date: str | date | None = None,
) -> list[str]:
    """Return every occurrence date of a repeating event as ``YYYY-MM-DD`` strings.

    The list always starts at ``start_date`` and runs up to and including the
    end bound (``end_date``, or one year after the start when omitted).
    Monthly and yearly series keep the day (and month) of the first
    occurrence; periods where that day does not exist are skipped rather than
    moved, so a series starting on Jan 31 has no February entry and a Feb 29
    yearly series only lands on leap years.

    Raises ``RecurrenceInputError`` for an unknown ``repeat_type``, an
    ``interval`` below 1, or a malformed date string.
    """
    return [format_date(value) for value in iter_repeat_dates(start_date, repeat_type, interval, end_date)]
