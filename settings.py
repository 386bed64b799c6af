from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_HOST_ENV = "SENSOR_API_HOST"
_PORT_ENV = "SENSOR_API_PORT"
_CAPACITY_ENV = "READING_CAPACITY"
_LIST_BURN_ENV = "LIST_BURN_MS"
_LOAD_TEST_DEFAULT_ENV = "LOAD_TEST_DEFAULT_MS"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    reading_capacity: int
    list_burn_ms: int
    load_test_default_ms: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_int_env(name: str, default: int, minimum: int = 1) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=_read_int_env(_PORT_ENV, 3000),
        reading_capacity=_read_int_env(_CAPACITY_ENV, 100),
        list_burn_ms=_read_int_env(_LIST_BURN_ENV, 100, minimum=0),
        load_test_default_ms=_read_int_env(_LOAD_TEST_DEFAULT_ENV, 1000, minimum=0),
        log_level=_read_log_level("INFO"),
    )
