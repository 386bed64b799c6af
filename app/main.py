from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api import router
from app.web import router as web_router
from datastore.reading_store import build_default_store
from logging_config import configure_logging
from services.readings import build_default_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    service = build_default_service()
    logger.info("IoT Sensor API ready", extra={"capacity": service.store.capacity})
    try:
        yield
    finally:
        build_default_service.cache_clear()
        build_default_store.cache_clear()


STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


def create_app(static_dir: Path = STATIC_DIR) -> FastAPI:
    """Build the API and mount the dashboard assets from ``static_dir``."""
    configure_logging()
    api = FastAPI(
        title="IoT Sensor API",
        description="In-memory sensor readings with synthetic CPU load for autoscaling tests.",
        version="0.1.0",
        lifespan=lifespan,
    )
    for sensor_router in (router, web_router):
        api.include_router(sensor_router)
    api.mount("/static", StaticFiles(directory=static_dir), name="static")
    return api


app = create_app()
