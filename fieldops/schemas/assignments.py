# fieldops/schemas/assignments.py
from datetime import datetime
from typing import Optional, List, Literal
from pydantic import BaseModel, Field

AssignmentType = Literal["Interventie", "Optimizare", "Deschidere"]

class AssignmentCreate(BaseModel):
    type: AssignmentType
    team_lead: str = Field(..., min_length=1)
    members: List[str] = []
    car_plate: Optional[str] = None
    store_number: Optional[str] = None
    store_points: List[str] = []
    location: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    start_date: Optional[datetime] = None   # defaults to creation time
    notes: Optional[str] = None

class AssignmentOut(BaseModel):
    id: int
    type: str
    status: str
    team_lead: Optional[str] = None
    members: List[str] = []
    car_plate: Optional[str] = None
    store_number: Optional[str] = None
    store_points: List[str] = []
    location: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    start_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    gps_start_date: Optional[datetime] = None
    gps_completion_date: Optional[datetime] = None
    km: Optional[float] = None
    driving_time: Optional[int] = None
    hours: Optional[float] = None
    notes: Optional[str] = None
    created_at: datetime
    model_config = {"from_attributes": True}

class DistanceUpdate(BaseModel):
    km: float = Field(..., ge=0)
    driving_time: int = Field(..., ge=0, description="minutes")

class GpsRefreshRequest(BaseModel):
    # empty -> every finalized assignment still missing a GPS return
    assignment_ids: List[int] = []
