from __future__ import annotations

import contextvars
import logging
import os
import uuid


REQUEST_ID_HEADER = "X-Request-ID"

_request_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class _RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get("-")
        return True


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def set_request_id(value: str) -> contextvars.Token[str]:
    return _request_id_ctx.set(value)


def reset_request_id(token: contextvars.Token[str]) -> None:
    _request_id_ctx.reset(token)


def configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] [req=%(request_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler.addFilter(_RequestIdFilter())
    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )
    # SQL echo stays off unless explicitly requested.
    if os.getenv("SQL_ECHO", "0").strip().lower() in {"1", "true", "yes", "on"}:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
