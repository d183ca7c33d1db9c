# fieldops/utils/assignment_flow.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from ..models import (
    Assignment,
    Worker,
    STATUS_FINALIZED,
    WORKER_FREE,
    WORKER_ON_TRIP,
)
from .vehicle_tracking import get_vehicle_timestamps

logger = logging.getLogger(__name__)


def compute_hours(a: Assignment) -> Optional[float]:
    """
    Hours worked, preferring GPS timestamps over the nominal ones on each
    side of the window independently.
    """
    start = a.gps_start_date or a.start_date
    end = a.gps_completion_date or a.completion_date
    if start is None or end is None:
        return None
    seconds = (end - start).total_seconds()
    return round(max(seconds, 0.0) / 3600.0, 2)


def _team_workers(db: Session, names: Iterable[str]) -> List[Worker]:
    names = [n for n in names if n]
    if not names:
        return []
    return db.query(Worker).filter(Worker.name.in_(names)).all()


def send_team_out(db: Session, a: Assignment) -> None:
    for w in _team_workers(db, a.team):
        w.status = WORKER_ON_TRIP
        w.current_assignment_start = a.start_date


def free_team(db: Session, a: Assignment, completed_at: Optional[datetime] = None) -> None:
    """
    Release the team from this trip. Only workers whose current trip is this
    one become free; a worker already sent out on a newer assignment keeps
    that status. ``completed_at`` is set on finalization and credits the
    assignment's hours to every team member.
    """
    for w in _team_workers(db, a.team):
        if w.status == WORKER_ON_TRIP and w.current_assignment_start == a.start_date:
            w.status = WORKER_FREE
            w.current_assignment_start = None
        if completed_at is None:
            continue
        w.last_completion_date = completed_at
        w.total_hours = round((w.total_hours or 0.0) + (a.hours or 0.0), 2)


def finalize_assignment(db: Session, a: Assignment, now: Optional[datetime] = None) -> Assignment:
    # Reconcile first: a storage failure rolls back the session.
    window = get_vehicle_timestamps(db, a.car_plate, a.created_at)

    now = now or datetime.utcnow()
    a.status = STATUS_FINALIZED
    a.completion_date = now
    a.gps_start_date = window.real_start_date
    a.gps_completion_date = window.real_completion_date
    a.hours = compute_hours(a)

    free_team(db, a, completed_at=now)
    db.commit()
    db.refresh(a)
    logger.info(
        "Assignment %s finalized: gps_start=%s gps_return=%s hours=%s",
        a.id,
        a.gps_start_date,
        a.gps_completion_date,
        a.hours,
    )
    return a


def refresh_gps(db: Session, a: Assignment) -> bool:
    """
    Re-run reconciliation for an already finalized assignment. Fields are
    only overwritten with non-null values; returns True when anything changed.
    """
    window = get_vehicle_timestamps(db, a.car_plate, a.created_at)
    changed = False
    if window.real_start_date and window.real_start_date != a.gps_start_date:
        a.gps_start_date = window.real_start_date
        changed = True
    if window.real_completion_date and window.real_completion_date != a.gps_completion_date:
        a.gps_completion_date = window.real_completion_date
        changed = True
    if changed:
        previous = a.hours or 0.0
        a.hours = compute_hours(a)
        delta = (a.hours or 0.0) - previous
        for w in _team_workers(db, a.team):
            w.total_hours = round((w.total_hours or 0.0) + delta, 2)
    return changed
