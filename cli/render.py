from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence

import typer

_READING_FIELDS = ("id", "sensorId", "temperature", "humidity", "location", "timestamp")


def _section(title: str, payload: Mapping[str, Any], fields: Sequence[str]) -> None:
    typer.secho(title, bold=True)
    width = max((len(field) for field in fields), default=0)
    for field in fields:
        typer.echo(f"{field:<{width}}  {payload.get(field)}")


def render_reading(payload: Dict[str, Any]) -> None:
    _section("Reading", payload, _READING_FIELDS)


def render_readings(payload: Dict[str, Any]) -> None:
    sensors = payload.get("sensors") or []
    typer.secho(f"Readings ({payload.get('count', len(sensors))})", bold=True)
    if not sensors:
        typer.echo("No readings recorded.")
        return
    for reading in sensors:
        typer.echo(
            f"  - {reading.get('sensorId')}: "
            f"temperature={reading.get('temperature')} "
            f"humidity={reading.get('humidity')} "
            f"location={reading.get('location')} "
            f"at {reading.get('timestamp')}"
        )


def render_status(title: str, payload: Dict[str, Any]) -> None:
    _section(title, payload, list(payload))
