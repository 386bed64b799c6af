from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional
from urllib.parse import quote

import httpx
import typer

from cli.config import CLIConfig


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _error_reason(response: httpx.Response) -> str:
    """Pull the message out of ``{"error": ...}`` or FastAPI's ``{"detail": ...}`` bodies."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict):
        reason = body.get("error") or body.get("detail")
        if reason:
            return str(reason)
    return response.reason_phrase


class ApiClient:
    """Minimal HTTP client for the sensor API."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    def list_sensors(self) -> Dict[str, Any]:
        return self._request("GET", "/api/sensors")

    def submit_reading(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/sensors", json=payload)

    def get_reading(self, sensor_id: str) -> Dict[str, Any]:
        return self._request(
            "GET",
            f"/api/sensors/{quote(sensor_id, safe='')}",
            not_found=f"Sensor {sensor_id} was not found.",
        )

    def load_test(self, duration: Optional[int] = None) -> Dict[str, Any]:
        params = {} if duration is None else {"duration": duration}
        return self._request("GET", "/api/load-test", params=params)

    def _request(
        self,
        method: str,
        path: str,
        not_found: Optional[str] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            _fail(f"Could not reach {self._config.base_url}: {exc}")
        if response.status_code == 404 and not_found is not None:
            _fail(not_found)
        if response.is_error:
            _fail(
                f"{method} {path} failed with status {response.status_code}: "
                f"{_error_reason(response)}"
            )
        return response.json()
