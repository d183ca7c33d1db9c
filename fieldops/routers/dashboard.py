from __future__ import annotations

import csv
import io
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Assignment, Store, ASSIGNMENT_TYPES, STATUS_FINALIZED
from ..schemas.assignments import AssignmentOut
from ..schemas.dashboard import (
    DateRangeOut,
    RiderKmItem,
    StoreOut,
    TotalsOut,
    TypeDistributionItem,
    TypeMonthOut,
    WorkerHoursItem,
)
from ..utils.date_ranges import day_span, parse_month, resolve_range

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def date_range(
    range_key: Optional[str] = Query(default=None, alias="range"),
    frm: Optional[date] = Query(default=None, alias="from"),
    to: Optional[date] = Query(default=None),
) -> DateRangeOut:
    """Explicit from/to win over a preset key; both absent -> this month."""
    if frm and to:
        if frm > to:
            raise HTTPException(status_code=400, detail="'from' must not be after 'to'")
        return DateRangeOut(key=None, frm=frm, to=to)
    start, end = resolve_range(range_key, datetime.utcnow().date())
    return DateRangeOut(key=range_key or "this-month", frm=start, to=end)


def _in_range(q, rng: DateRangeOut):
    start_dt, end_dt = day_span(rng.frm, rng.to)
    return q.filter(Assignment.start_date >= start_dt).filter(Assignment.start_date <= end_dt)


def _credit_team(rows: List[Assignment], attr: str) -> List[Tuple[str, float, int]]:
    """Credit each team member with the assignment's ``attr`` value."""
    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)
    for a in rows:
        value = float(getattr(a, attr) or 0.0)
        for name in a.team:
            totals[name] += value
            counts[name] += 1
    ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return [(name, round(total, 2), counts[name]) for name, total in ranked]


def _finalized_in_range(db: Session, rng: DateRangeOut) -> List[Assignment]:
    q = db.query(Assignment).filter(Assignment.status == STATUS_FINALIZED)
    return _in_range(q, rng).all()


# -----------------------------------------------------
# Rankings
# -----------------------------------------------------
@router.get("/top-workers", response_model=List[WorkerHoursItem])
def top_workers(
    limit: int = Query(5, ge=-1),
    rng: DateRangeOut = Depends(date_range),
    db: Session = Depends(get_db),
):
    ranked = _credit_team(_finalized_in_range(db, rng), "hours")
    if limit >= 0:
        ranked = ranked[:limit]
    return [WorkerHoursItem(name=n, hours=h, assignments=c) for n, h, c in ranked]


@router.get("/top-riders", response_model=List[RiderKmItem])
def top_riders(
    limit: int = Query(5, ge=-1),
    rng: DateRangeOut = Depends(date_range),
    db: Session = Depends(get_db),
):
    rows = [a for a in _finalized_in_range(db, rng) if a.km]
    ranked = _credit_team(rows, "km")
    if limit >= 0:
        ranked = ranked[:limit]
    return [RiderKmItem(name=n, km=k, assignments=c) for n, k, c in ranked]


@router.get("/work-distribution", response_model=List[TypeDistributionItem])
def work_distribution(
    rng: DateRangeOut = Depends(date_range),
    db: Session = Depends(get_db),
):
    q = db.query(
        Assignment.type.label("type"),
        func.count(Assignment.id).label("count"),
        func.coalesce(func.sum(Assignment.hours), 0.0).label("hours"),
    )
    rows = _in_range(q, rng).group_by(Assignment.type).order_by(Assignment.type.asc()).all()
    return [
        TypeDistributionItem(type=row.type, count=int(row.count or 0), hours=round(float(row.hours or 0.0), 2))
        for row in rows
    ]


@router.get("/totals", response_model=TotalsOut)
def totals(
    rng: DateRangeOut = Depends(date_range),
    db: Session = Depends(get_db),
):
    q = db.query(
        func.coalesce(func.sum(Assignment.hours), 0.0),
        func.coalesce(func.sum(Assignment.km), 0.0),
    ).filter(Assignment.status == STATUS_FINALIZED)
    hours, km = _in_range(q, rng).one()
    return TotalsOut(range=rng, total_hours=round(float(hours), 2), total_km=round(float(km), 1))


# -----------------------------------------------------
# Per-type monthly timeline
# -----------------------------------------------------
def _store_ids(rows: List[Assignment]) -> List[int]:
    ids: List[int] = []
    for a in rows:
        for raw in [a.store_number, *(a.store_points or [])]:
            try:
                sid = int(str(raw).strip())
            except (TypeError, ValueError):
                continue
            if sid not in ids:
                ids.append(sid)
    return ids


@router.get("/type", response_model=TypeMonthOut)
def assignments_by_type(
    type: str = Query("Interventie"),
    month: Optional[str] = Query(None, description="YYYY-MM"),
    db: Session = Depends(get_db),
):
    if type not in ASSIGNMENT_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown assignment type '{type}'")

    frm, to = parse_month(month, datetime.utcnow().date())
    rng = DateRangeOut(key=None, frm=frm, to=to)
    q = db.query(Assignment).filter(Assignment.type == type)
    rows = _in_range(q, rng).order_by(Assignment.start_date.desc()).all()

    ids = _store_ids(rows)
    stores = (
        db.query(Store).filter(Store.store_id.in_(ids)).order_by(Store.store_id.asc()).all()
        if ids
        else []
    )
    return TypeMonthOut(
        type=type,
        month=frm.strftime("%Y-%m"),
        range=rng,
        assignments=[AssignmentOut.model_validate(a) for a in rows],
        stores=[StoreOut.model_validate(s) for s in stores],
    )


# -----------------------------------------------------
# Export
# -----------------------------------------------------
@router.get("/export")
def export_work_logs(
    rng: DateRangeOut = Depends(date_range),
    db: Session = Depends(get_db),
):
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "assignment_id", "type", "status", "team_lead", "members", "car_plate",
        "store_number", "city", "county", "start_date", "completion_date",
        "gps_start_date", "gps_completion_date", "hours", "km", "driving_time",
    ])
    rows = _in_range(db.query(Assignment), rng).order_by(Assignment.start_date.asc()).all()
    for a in rows:
        writer.writerow([
            a.id,
            a.type,
            a.status,
            a.team_lead or "",
            "; ".join(a.members or []),
            a.car_plate or "",
            a.store_number or "",
            a.city or "",
            a.county or "",
            a.start_date.isoformat() if a.start_date else "",
            a.completion_date.isoformat() if a.completion_date else "",
            a.gps_start_date.isoformat() if a.gps_start_date else "",
            a.gps_completion_date.isoformat() if a.gps_completion_date else "",
            a.hours if a.hours is not None else "",
            a.km if a.km is not None else "",
            a.driving_time if a.driving_time is not None else "",
        ])

    output.seek(0)
    filename = f"work_logs_{rng.frm.isoformat()}_to_{rng.to.isoformat()}.csv"
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
