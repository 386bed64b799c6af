"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

import math
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


def _finite_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        candidate = value.strip()
        try:
            value = int(candidate)
        except ValueError:
            try:
                value = float(candidate)
            except ValueError:
                return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


class ReadingCreate(BaseModel):
    """Partial reading submitted by a client.

    Every field is optional. Values of the wrong kind are dropped rather than
    rejected so the store can substitute its defaults.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sensor_id: Optional[str] = Field(default=None, alias="sensorId")
    temperature: Optional[Number] = None
    humidity: Optional[Number] = None
    location: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> ReadingCreate:
        """Build a candidate from an arbitrary decoded request body."""
        return cls.model_validate(payload if isinstance(payload, dict) else {})

    @field_validator("sensor_id", "location", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> Optional[str]:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value or None
        return None

    @field_validator("temperature", "humidity", mode="before")
    @classmethod
    def _number_or_none(cls, value: Any) -> Optional[Number]:
        return _finite_number(value)


class SensorReading(BaseModel):
    """A fully populated reading as held by the store."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(..., description="Creation time in epoch milliseconds.")
    sensor_id: str = Field(..., alias="sensorId")
    temperature: Number
    humidity: Number
    location: str
    timestamp: str = Field(..., description="ISO-8601 creation time (UTC).")


class SensorListResponse(BaseModel):
    sensors: List[SensorReading]
    count: int = Field(..., ge=0)
    timestamp: str


class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: str


class LoadTestResponse(BaseModel):
    message: str = "Load test completed"
    duration: str = Field(..., description="Requested busy-wait, e.g. ``1000ms``.")
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
