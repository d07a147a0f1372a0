from datetime import date

import pytest

from calendar_app.services.recurrence_engine import RecurrenceInputError
from calendar_app.services.scheduling_service import EventDraft, RepeatSpec, build_event_seeds


DRAFT = EventDraft(
    title="Team sync",
    event_date=date(2025, 10, 1),
    start_time="09:00",
    end_time="10:00",
    description="Weekly sync",
    location="Room A",
    category="Work",
)


def test_non_repeating_event_produces_single_seed_without_series() -> None:
    seeds = build_event_seeds(draft=DRAFT, repeat=RepeatSpec())

    assert len(seeds) == 1
    assert seeds[0].event_date == date(2025, 10, 1)
    assert seeds[0].repeat_id is None
    assert seeds[0].repeat.is_recurring is False


def test_weekly_series_shares_one_repeat_id() -> None:
    seeds = build_event_seeds(
        draft=DRAFT,
        repeat=RepeatSpec(repeat_type="weekly", interval=1, end_date=date(2025, 10, 22)),
    )

    assert [seed.event_date for seed in seeds] == [
        date(2025, 10, 1),
        date(2025, 10, 8),
        date(2025, 10, 15),
        date(2025, 10, 22),
    ]
    assert len({seed.repeat_id for seed in seeds}) == 1
    assert seeds[0].repeat_id is not None
    assert all(seed.draft.title == "Team sync" for seed in seeds)


def test_explicit_repeat_id_is_reused() -> None:
    seeds = build_event_seeds(
        draft=DRAFT,
        repeat=RepeatSpec(repeat_type="daily", interval=2, end_date=date(2025, 10, 5)),
        repeat_id="series-1",
    )

    assert [seed.event_date for seed in seeds] == [date(2025, 10, 1), date(2025, 10, 3), date(2025, 10, 5)]
    assert {seed.repeat_id for seed in seeds} == {"series-1"}


def test_each_series_gets_a_fresh_repeat_id() -> None:
    repeat = RepeatSpec(repeat_type="monthly", end_date=date(2025, 12, 1))
    first = build_event_seeds(draft=DRAFT, repeat=repeat)
    second = build_event_seeds(draft=DRAFT, repeat=repeat)

    assert first[0].repeat_id != second[0].repeat_id
    assert [seed.event_date for seed in first] == [seed.event_date for seed in second]


def test_invalid_repeat_spec_is_rejected() -> None:
    with pytest.raises(RecurrenceInputError):
        build_event_seeds(draft=DRAFT, repeat=RepeatSpec(repeat_type="weekly", interval=0))
