# fieldops/schemas/dashboard.py
from datetime import date
from typing import List, Optional
from pydantic import BaseModel

from .assignments import AssignmentOut


class DateRangeOut(BaseModel):
    key: Optional[str] = None
    frm: date
    to: date

class WorkerHoursItem(BaseModel):
    name: str
    hours: float
    assignments: int

class RiderKmItem(BaseModel):
    name: str
    km: float
    assignments: int

class TypeDistributionItem(BaseModel):
    type: str
    count: int
    hours: float

class TotalsOut(BaseModel):
    range: DateRangeOut
    total_hours: float
    total_km: float

class StoreOut(BaseModel):
    store_id: int
    description: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    address: Optional[str] = None
    model_config = {"from_attributes": True}

class TypeMonthOut(BaseModel):
    type: str
    month: str
    range: DateRangeOut
    assignments: List[AssignmentOut]
    stores: List[StoreOut]
