# fieldops/jobs/gps_refresh.py
from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..db import SessionLocal
from ..models import Assignment, STATUS_FINALIZED
from ..utils.assignment_flow import refresh_gps

logger = logging.getLogger(__name__)


def pending_assignment_ids(db: Session) -> List[int]:
    """Finalized assignments with a vehicle whose GPS return is still unknown."""
    rows = (
        db.query(Assignment.id)
        .filter(Assignment.status == STATUS_FINALIZED)
        .filter(Assignment.car_plate.isnot(None))
        .filter(Assignment.gps_completion_date.is_(None))
        .order_by(Assignment.id.asc())
        .all()
    )
    return [r[0] for r in rows]


def refresh_gps_timestamps(
    assignment_ids: Optional[List[int]] = None,
    session_factory=SessionLocal,
) -> Dict:
    """
    RQ entry point: re-reconcile finalized assignments.

    Returns a summary such as
      {"status": "completed", "checked": 4, "updated": [12, 15], "duration_sec": 0.12}
    """
    t0 = time.time()
    db: Session = session_factory()
    try:
        ids = assignment_ids or pending_assignment_ids(db)
        updated: List[int] = []
        rows = (
            db.query(Assignment)
            .filter(Assignment.id.in_(ids))
            .filter(Assignment.status == STATUS_FINALIZED)
            .all()
        ) if ids else []
        for a in rows:
            if refresh_gps(db, a):
                db.commit()
                updated.append(a.id)
    finally:
        db.close()

    logger.info("GPS refresh checked %d assignments, updated %s", len(rows), updated)
    return {
        "status": "completed",
        "checked": len(rows),
        "updated": updated,
        "duration_sec": round(time.time() - t0, 3),
    }
