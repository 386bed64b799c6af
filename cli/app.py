from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import typer
import uvicorn

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_reading, render_readings, render_status
from logging_config import configure_logging
from settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for running and talking to the IoT sensor API.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Sensor API base URL (defaults to API_BASE_URL env or http://localhost:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for a response; long load tests need a generous value.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Check that the service is up."""
    state = _get_state(ctx)
    render_status("Health", state.client.health())


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List retained readings (the server burns CPU before answering)."""
    state = _get_state(ctx)
    render_readings(state.client.list_sensors())


@app.command("submit")
def submit_command(
    ctx: typer.Context,
    sensor_id: Optional[str] = typer.Option(None, "--sensor-id", "-s", help="Sensor identifier."),
    temperature: Optional[float] = typer.Option(None, "--temperature", "-t"),
    humidity: Optional[float] = typer.Option(None, "--humidity"),
    location: Optional[str] = typer.Option(None, "--location", "-l"),
) -> None:
    """Record a reading; omitted fields are generated by the server."""
    state = _get_state(ctx)
    fields = {
        "sensorId": sensor_id,
        "temperature": temperature,
        "humidity": humidity,
        "location": location,
    }
    payload: Dict[str, Any] = {key: value for key, value in fields.items() if value is not None}
    reading = state.client.submit_reading(payload)
    typer.secho(f"Reading recorded. sensorId={reading.get('sensorId')}", fg=typer.colors.GREEN)
    render_reading(reading)


@app.command("get")
def get_command(
    ctx: typer.Context,
    sensor_id: str = typer.Argument(..., help="Sensor identifier to look up."),
) -> None:
    """Show the oldest retained reading for a sensor."""
    state = _get_state(ctx)
    render_reading(state.client.get_reading(sensor_id))


@app.command("load-test")
def load_test_command(
    ctx: typer.Context,
    duration: Optional[int] = typer.Option(
        None,
        "--duration",
        "-d",
        help="Milliseconds of CPU to burn on the server (server default when omitted).",
    ),
) -> None:
    """Ask the server to burn CPU for a while."""
    state = _get_state(ctx)
    typer.echo(f"Requesting load test on {state.config.base_url} ...")
    render_status("Load Test", state.client.load_test(duration))


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(
        None, "--host", help="Bind address (defaults to SENSOR_API_HOST)."
    ),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Bind port (defaults to SENSOR_API_PORT)."
    ),
) -> None:
    """Run the API server."""
    settings = get_settings()
    bind_host = host if host is not None else settings.host
    bind_port = port if port is not None else settings.port

    configure_logging()
    logger.info("IoT Sensor API running on port %s", bind_port)
    logger.info("Health check: http://localhost:%s/health", bind_port)
    logger.info("API endpoints: http://localhost:%s/api/sensors", bind_port)
    uvicorn.run("app.main:app", host=bind_host, port=bind_port, log_config=None)
