"""Events table

Revision ID: 20251019_0001
Revises:
Create Date: 2025-10-19 09:00:00
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20251019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("location", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("category", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("repeat_type", sa.String(length=16), nullable=False, server_default="none"),
        sa.Column("repeat_interval", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("repeat_end_date", sa.Date(), nullable=True),
        sa.Column("repeat_id", sa.String(length=32), nullable=True),
        sa.Column("notification_time", sa.Integer(), nullable=False, server_default=sa.text("10")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.CheckConstraint(
            "repeat_type IN ('none','daily','weekly','monthly','yearly')",
            name="ck_events_repeat_type",
        ),
        sa.CheckConstraint("repeat_interval >= 1", name="ck_events_repeat_interval"),
    )
    op.create_index("ix_events_event_date", "events", ["event_date"])
    op.create_index("ix_events_repeat_id", "events", ["repeat_id"])


def downgrade() -> None:
    op.drop_index("ix_events_repeat_id", table_name="events")
    op.drop_index("ix_events_event_date", table_name="events")
    op.drop_table("events")
