from __future__ import annotations

from datetime import date

from sqlalchemy import CheckConstraint, Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from calendar_app.config import DEFAULT_NOTIFICATION_MINUTES
from calendar_app.models.base import Base, TimestampMixin


class Event(TimestampMixin, Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "repeat_type IN ('none','daily','weekly','monthly','yearly')",
            name="ck_events_repeat_type",
        ),
        CheckConstraint("repeat_interval >= 1", name="ck_events_repeat_interval"),
        Index("ix_events_event_date", "event_date"),
        Index("ix_events_repeat_id", "repeat_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    category: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    repeat_type: Mapped[str] = mapped_column(String(16), nullable=False, default="none")
    repeat_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    repeat_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    repeat_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    notification_time: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_NOTIFICATION_MINUTES)

    @property
    def is_recurring(self) -> bool:
        return self.repeat_type != "none"
