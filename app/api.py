"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from app.schemas import (
    ErrorResponse,
    HealthResponse,
    LoadTestResponse,
    ReadingCreate,
    SensorListResponse,
    SensorReading,
)
from services.readings import ReadingService, build_default_service, parse_duration
from settings import get_settings
from timeutil import utc_timestamp

SENSOR_NOT_FOUND = "Sensor not found"

router = APIRouter()


def get_service() -> ReadingService:
    return build_default_service()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> HealthResponse:
    return HealthResponse(status="healthy", timestamp=utc_timestamp())


@router.get(
    "/api/sensors",
    response_model=SensorListResponse,
    summary="List retained readings after a short CPU burn.",
)
async def list_sensors(
    service: ReadingService = Depends(get_service),
) -> SensorListResponse:
    readings, count = service.list_readings()
    return SensorListResponse(sensors=readings, count=count, timestamp=utc_timestamp())


@router.post(
    "/api/sensors",
    status_code=status.HTTP_201_CREATED,
    response_model=SensorReading,
    summary="Record a reading, filling in any missing fields.",
)
async def create_sensor_reading(
    payload: Any = Body(
        None, description="Partial reading; anything but a JSON object counts as empty."
    ),
    service: ReadingService = Depends(get_service),
) -> SensorReading:
    return service.record_reading(ReadingCreate.from_payload(payload))


@router.get(
    "/api/sensors/{sensor_id:path}",
    response_model=SensorReading,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    summary="Fetch the oldest retained reading for a sensor.",
)
async def get_sensor_reading(
    sensor_id: str,
    service: ReadingService = Depends(get_service),
) -> Union[SensorReading, JSONResponse]:
    try:
        return service.fetch_reading(sensor_id)
    except KeyError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ErrorResponse(error=SENSOR_NOT_FOUND).model_dump(),
        )


@router.get(
    "/api/load-test",
    response_model=LoadTestResponse,
    summary="Burn CPU for the requested number of milliseconds.",
)
async def load_test(
    duration: Optional[str] = Query(
        None, description="Milliseconds to burn; non-numeric values use the default."
    ),
    service: ReadingService = Depends(get_service),
) -> LoadTestResponse:
    duration_ms = parse_duration(duration, get_settings().load_test_default_ms)
    service.run_load_test(duration_ms)
    return LoadTestResponse(duration=f"{duration_ms}ms", timestamp=utc_timestamp())
