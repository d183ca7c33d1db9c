# fieldops/schemas/workers.py
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class WorkerCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=120)

class WorkerOut(BaseModel):
    id: int
    name: str
    status: str
    current_assignment_start: Optional[datetime] = None
    last_completion_date: Optional[datetime] = None
    total_hours: float = 0.0
    active: bool = True
    model_config = {
        "from_attributes": True,
    }
