from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from calendar_app.config import get_settings
from calendar_app.db import create_schema_if_enabled
from calendar_app.logging_config import (
    REQUEST_ID_HEADER,
    configure_logging,
    new_request_id,
    reset_request_id,
    set_request_id,
)
from calendar_app.routes.api import api_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting calendar application")
    if create_schema_if_enabled():
        logger.info("Database schema ensured")
    else:
        logger.info("Automatic schema creation disabled; expecting migrations to be applied")
    yield
    logger.info("Shutting down calendar application")


def create_app() -> FastAPI:
    app = FastAPI(title="Calendar", version="0.1.0", lifespan=lifespan)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("calendar_app.main:app", host=settings.app_host, port=settings.app_port)
