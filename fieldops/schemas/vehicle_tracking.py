# fieldops/schemas/vehicle_tracking.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class VehicleTimestamps(BaseModel):
    """Telemetry-derived window of one assignment; both fields may be null."""

    real_start_date: Optional[datetime] = Field(
        None, description="First sample away from base after the assignment was created"
    )
    real_completion_date: Optional[datetime] = Field(
        None, description="First sample back at base after departure"
    )

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> "VehicleTimestamps":
        return cls(real_start_date=None, real_completion_date=None)


class PresenceSampleOut(BaseModel):
    id: int
    car_plate: str
    timestamp: datetime
    was_near_base: bool
    model_config = {"from_attributes": True}
