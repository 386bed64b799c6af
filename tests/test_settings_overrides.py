from __future__ import annotations

from typing import Iterable

from datastore.reading_store import build_default_store
from services.readings import build_default_service
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


_CACHES = (get_settings, build_default_store, build_default_service)


def test_defaults_without_environment(monkeypatch) -> None:
    for name in (
        "SENSOR_API_HOST",
        "SENSOR_API_PORT",
        "READING_CAPACITY",
        "LIST_BURN_MS",
        "LOAD_TEST_DEFAULT_MS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    _clear_caches(_CACHES)

    try:
        settings = get_settings()
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.reading_capacity == 100
        assert settings.list_burn_ms == 100
        assert settings.load_test_default_ms == 1000
        assert settings.log_level == "INFO"
    finally:
        _clear_caches(_CACHES)


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_API_HOST", "127.0.0.1")
    monkeypatch.setenv("SENSOR_API_PORT", "8080")
    monkeypatch.setenv("READING_CAPACITY", "5")
    monkeypatch.setenv("LIST_BURN_MS", "0")
    monkeypatch.setenv("LOAD_TEST_DEFAULT_MS", "250")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    _clear_caches(_CACHES)

    try:
        settings = get_settings()
        service = build_default_service()

        assert settings.host == "127.0.0.1"
        assert settings.port == 8080
        assert settings.load_test_default_ms == 250
        assert settings.log_level == "DEBUG"
        assert service.list_burn_ms == 0
        assert service.store.capacity == 5
        assert service.store is build_default_store()
    finally:
        _clear_caches(_CACHES)


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_API_PORT", "not-a-port")
    monkeypatch.setenv("READING_CAPACITY", "0")
    monkeypatch.setenv("LIST_BURN_MS", "-10")
    monkeypatch.setenv("SENSOR_API_HOST", "   ")
    _clear_caches(_CACHES)

    try:
        settings = get_settings()
        assert settings.port == 3000
        assert settings.reading_capacity == 100
        assert settings.list_burn_ms == 100
        assert settings.host == "0.0.0.0"
    finally:
        _clear_caches(_CACHES)
