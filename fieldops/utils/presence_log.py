# fieldops/utils/presence_log.py
"""
Read-only access to the vehicle presence time series.

Each lookup is a single-row range scan on (car_plate, timestamp); the
lower bound is always exclusive so a sample sitting exactly on the
boundary is never returned.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import VehiclePresence


def _first_after(db: Session, car_plate: str, after: datetime, near_base: bool) -> Optional[datetime]:
    row = (
        db.query(VehiclePresence.timestamp)
        .filter(VehiclePresence.car_plate == car_plate)
        .filter(VehiclePresence.timestamp > after)
        .filter(VehiclePresence.was_near_base == near_base)
        .order_by(VehiclePresence.timestamp.asc())
        .limit(1)
        .first()
    )
    return row[0] if row else None


def first_departure_after(db: Session, car_plate: str, after: datetime) -> Optional[datetime]:
    """Earliest away-from-base sample strictly after ``after``."""
    return _first_after(db, car_plate, after, near_base=False)


def first_return_after(db: Session, car_plate: str, after: datetime) -> Optional[datetime]:
    """Earliest at-base sample strictly after ``after``."""
    return _first_after(db, car_plate, after, near_base=True)


def list_samples(
    db: Session,
    car_plate: str,
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    limit: int = 500,
) -> List[VehiclePresence]:
    q = db.query(VehiclePresence).filter(VehiclePresence.car_plate == car_plate)
    if since:
        q = q.filter(VehiclePresence.timestamp >= since)
    if until:
        q = q.filter(VehiclePresence.timestamp <= until)
    return q.order_by(VehiclePresence.timestamp.asc()).limit(limit).all()
