from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

import calendar_app.models  # noqa: F401
from calendar_app.config import get_settings
from calendar_app.models.base import Base

settings = get_settings()


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def _sqlite_connect_args(database_url: str) -> dict:
    if _is_sqlite(database_url):
        return {"check_same_thread": False, "timeout": settings.sqlite_busy_timeout_ms / 1000}
    return {}


engine = create_engine(
    settings.database_url,
    future=True,
    pool_pre_ping=True,
    connect_args=_sqlite_connect_args(settings.database_url),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


if _is_sqlite(settings.database_url):

    @event.listens_for(engine, "connect")
    def apply_sqlite_pragmas(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        # In-memory databases cannot switch to WAL.
        if ":memory:" not in settings.database_url:
            cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute(f"PRAGMA busy_timeout={settings.sqlite_busy_timeout_ms};")
        cursor.close()


def get_db_session() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_schema_if_enabled() -> bool:
    if not settings.auto_create_schema:
        return False
    Base.metadata.create_all(engine)
    return True
