from __future__ import annotations

import logging
import random
from collections import deque
from datetime import datetime
from functools import lru_cache
from threading import Lock
from typing import Callable, Deque, Optional

from app.schemas import ReadingCreate, SensorReading
from settings import get_settings
from timeutil import isoformat_utc, now_utc

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
DEFAULT_LOCATION = "unknown"


class ReadingStore:
    """Keeps the most recent ``capacity`` readings in insertion order."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"Reading store capacity must be positive, got {capacity!r}.")
        self._capacity = capacity
        self._readings: Deque[SensorReading] = deque()
        self._rng = rng or random.Random()
        self._clock = clock or now_utc
        self._lock = Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, candidate: ReadingCreate) -> SensorReading:
        created_at = self._clock()
        with self._lock:
            reading = SensorReading(
                id=int(created_at.timestamp() * 1000),
                sensor_id=candidate.sensor_id or f"sensor-{self._rng.randrange(1000)}",
                temperature=(
                    candidate.temperature
                    if candidate.temperature is not None
                    else self._rng.randrange(10, 50)
                ),
                humidity=(
                    candidate.humidity
                    if candidate.humidity is not None
                    else self._rng.randrange(100)
                ),
                location=candidate.location or DEFAULT_LOCATION,
                timestamp=isoformat_utc(created_at),
            )
            self._readings.append(reading)
            while len(self._readings) > self._capacity:
                evicted = self._readings.popleft()
                logger.debug(
                    "Evicted oldest reading",
                    extra={"evicted_sensor_id": evicted.sensor_id, "capacity": self._capacity},
                )
        return reading

    def list(self) -> tuple[list[SensorReading], int]:
        with self._lock:
            readings = list(self._readings)
        return readings, len(readings)

    def find_by_sensor_id(self, sensor_id: str) -> Optional[SensorReading]:
        with self._lock:
            for reading in self._readings:
                if reading.sensor_id == sensor_id:
                    return reading
        return None


@lru_cache
def build_default_store() -> ReadingStore:
    return ReadingStore(capacity=get_settings().reading_capacity)
