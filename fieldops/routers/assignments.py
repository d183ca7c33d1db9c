from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Assignment, STATUS_ACTIVE, STATUS_FINALIZED
from ..schemas.assignments import AssignmentCreate, AssignmentOut, DistanceUpdate
from ..schemas.vehicle_tracking import VehicleTimestamps
from ..utils.assignment_flow import finalize_assignment, free_team, send_team_out
from ..utils.vehicle_tracking import get_vehicle_timestamps

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["Assignments"])


def _get_or_404(db: Session, assignment_id: int) -> Assignment:
    a = db.query(Assignment).get(assignment_id)
    if not a:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return a


def _matches(a: Assignment, term: str) -> bool:
    fields = [a.location, a.team_lead, a.type, a.store_number, str(a.id)]
    if any(term in (f or "").lower() for f in fields):
        return True
    return any(term in m.lower() for m in a.members or [])


# -----------------------------------------------------
# List / get
# -----------------------------------------------------
@router.get("/", response_model=List[AssignmentOut])
def list_assignments(
    tab: Literal["active", "completed", "all"] = "all",
    type: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    q = db.query(Assignment)
    if tab == "active":
        q = q.filter(Assignment.status != STATUS_FINALIZED)
    elif tab == "completed":
        q = q.filter(Assignment.status == STATUS_FINALIZED)
    if type and type != "All":
        q = q.filter(Assignment.type == type)

    rows = q.all()
    if search:
        term = search.strip().lower()
        rows = [a for a in rows if _matches(a, term)]

    # newest first; undated rows last
    rows.sort(key=lambda a: a.start_date or datetime.min, reverse=True)
    return rows


@router.get("/{assignment_id}", response_model=AssignmentOut)
def get_assignment(assignment_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, assignment_id)


# -----------------------------------------------------
# Create / delete
# -----------------------------------------------------
@router.post("/", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
def create_assignment(payload: AssignmentCreate, db: Session = Depends(get_db)):
    now = datetime.utcnow()
    a = Assignment(
        type=payload.type,
        status=STATUS_ACTIVE,
        team_lead=payload.team_lead.strip(),
        members=payload.members,
        car_plate=payload.car_plate,
        store_number=payload.store_number,
        store_points=payload.store_points,
        location=payload.location,
        city=payload.city,
        county=payload.county,
        start_date=payload.start_date or now,
        notes=payload.notes,
        created_at=now,
    )
    db.add(a)
    send_team_out(db, a)
    db.commit()
    db.refresh(a)
    logger.info("Assignment %s created (%s, car %s)", a.id, a.type, a.car_plate or "-")
    return a


@router.delete("/{assignment_id}")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    a = _get_or_404(db, assignment_id)
    if a.status != STATUS_FINALIZED:
        free_team(db, a)
    db.delete(a)
    db.commit()
    return {"status": "deleted", "id": assignment_id}


# -----------------------------------------------------
# Finalize
# -----------------------------------------------------
@router.post("/{assignment_id}/finalize", response_model=AssignmentOut)
def finalize(assignment_id: int, db: Session = Depends(get_db)):
    a = _get_or_404(db, assignment_id)
    if a.status == STATUS_FINALIZED:
        raise HTTPException(status_code=409, detail="Assignment already finalized")
    return finalize_assignment(db, a)


@router.get("/{assignment_id}/vehicle-timestamps", response_model=VehicleTimestamps)
def preview_vehicle_timestamps(assignment_id: int, db: Session = Depends(get_db)):
    """GPS window as it would be recorded if the assignment were finalized now."""
    a = _get_or_404(db, assignment_id)
    return get_vehicle_timestamps(db, a.car_plate, a.created_at)


# -----------------------------------------------------
# Distance
# -----------------------------------------------------
@router.patch("/{assignment_id}/distance", response_model=AssignmentOut)
def record_distance(assignment_id: int, req: DistanceUpdate, db: Session = Depends(get_db)):
    a = _get_or_404(db, assignment_id)
    a.km = round(req.km, 1)
    a.driving_time = req.driving_time
    db.commit()
    db.refresh(a)
    return a
