# fieldops/routers/vehicles.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..models.ops import blank_plate
from ..schemas.vehicle_tracking import PresenceSampleOut
from ..utils.presence_log import list_samples

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("/{car_plate}/presence", response_model=List[PresenceSampleOut])
def vehicle_presence(
    car_plate: str,
    since: Optional[datetime] = Query(None),
    until: Optional[datetime] = Query(None),
    limit: int = Query(500, ge=1, le=5000),
    db: Session = Depends(get_db),
):
    """Raw presence samples for one vehicle, oldest first (read-only)."""
    if blank_plate(car_plate):
        raise HTTPException(status_code=400, detail="Car plate is required")
    return list_samples(db, car_plate, since=since, until=until, limit=limit)
