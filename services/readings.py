"""Reading ingestion, lookup and synthetic load orchestration."""

from __future__ import annotations

import logging
import re
import time
from functools import lru_cache
from typing import List, Optional, Tuple

from app.schemas import ReadingCreate, SensorReading
from datastore.reading_store import ReadingStore, build_default_store
from services.load import burn
from settings import get_settings

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_duration(raw: Optional[str], default: int) -> int:
    """Read the leading integer of ``raw``; fall back to ``default`` when there is none."""
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    return int(match.group(1))


class ReadingService:
    """Front door for the HTTP layer over the reading store and load generator."""

    def __init__(self, store: ReadingStore, list_burn_ms: int = 100) -> None:
        self.store = store
        self.list_burn_ms = list_burn_ms

    def record_reading(self, candidate: ReadingCreate) -> SensorReading:
        reading = self.store.append(candidate)
        logger.info(
            "Recorded reading",
            extra={"sensor_id": reading.sensor_id, "reading_id": reading.id},
        )
        return reading

    def list_readings(self) -> Tuple[List[SensorReading], int]:
        """Burn ``list_burn_ms`` of CPU, then return the retained readings."""
        burn(self.list_burn_ms)
        readings, count = self.store.list()
        logger.debug("Listed readings", extra={"count": count})
        return readings, count

    def fetch_reading(self, sensor_id: str) -> SensorReading:
        reading = self.store.find_by_sensor_id(sensor_id)
        if reading is None:
            raise KeyError(f"Sensor {sensor_id!r} not found.")
        return reading

    def run_load_test(self, duration_ms: int) -> int:
        start = time.perf_counter()
        burn(duration_ms)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "Load test completed",
            extra={"duration_ms": duration_ms, "elapsed_ms": elapsed_ms},
        )
        return duration_ms


@lru_cache
def build_default_service() -> ReadingService:
    """Factory that wires the service with the shared default store."""
    settings = get_settings()
    return ReadingService(store=build_default_store(), list_burn_ms=settings.list_burn_ms)
