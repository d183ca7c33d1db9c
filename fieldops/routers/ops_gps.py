# fieldops/routers/ops_gps.py
from fastapi import APIRouter, Depends, HTTPException
from redis import Redis
from rq.exceptions import NoSuchJobError
from rq.job import Job
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..jobs.gps_refresh import pending_assignment_ids, refresh_gps_timestamps
from ..rq_connection import gps_queue
from ..schemas.assignments import GpsRefreshRequest

router = APIRouter(
    prefix="/ops/gps-refresh",
    tags=["GPS Jobs"],
)


@router.get("/pending")
def list_pending(db: Session = Depends(get_db)):
    """Finalized assignments still waiting for a GPS return."""
    return {"assignment_ids": pending_assignment_ids(db)}


@router.post("")
def start_refresh(req: GpsRefreshRequest):
    job = gps_queue.enqueue(
        refresh_gps_timestamps,
        req.assignment_ids or None,
        job_timeout=settings.GPS_REFRESH_JOB_TIMEOUT,
    )
    return {
        "job_id": job.id,
        "status": "queued",
        "assignment_ids": req.assignment_ids,
    }


@router.get("/{job_id}")
def get_refresh_status(job_id: str):
    """
    Poll an RQ job by ID. When finished, ``result`` is the summary
    returned by refresh_gps_timestamps(...).
    """
    conn: Redis = gps_queue.connection  # type: ignore
    try:
        job = Job.fetch(job_id, connection=conn)
    except NoSuchJobError:
        raise HTTPException(status_code=404, detail="Job not found")

    if job.is_finished:
        return {"status": "completed", "result": job.return_value()}
    if job.is_failed:
        latest = job.latest_result()
        return {"status": "failed", "error": latest.exc_string if latest else None}
    if job.is_started:
        return {"status": "running"}
    return {"status": "queued"}
