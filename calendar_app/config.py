from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    app_host: str
    app_port: int
    sqlite_busy_timeout_ms: int
    default_notification_minutes: int
    auto_create_schema: bool


def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./calendar_app.db"),
        app_host=os.getenv("APP_HOST", "0.0.0.0"),
        app_port=int(os.getenv("APP_PORT", "8000")),
        sqlite_busy_timeout_ms=int(os.getenv("SQLITE_BUSY_TIMEOUT_MS", "5000")),
        default_notification_minutes=int(os.getenv("DEFAULT_NOTIFICATION_MINUTES", "10")),
        auto_create_schema=_env_flag("AUTO_CREATE_SCHEMA", "1"),
    )


DEFAULT_NOTIFICATION_MINUTES = get_settings().default_notification_minutes
