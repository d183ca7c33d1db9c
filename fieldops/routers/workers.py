# fieldops/routers/workers.py
from __future__ import annotations

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Worker, WORKER_FREE
from ..schemas.workers import WorkerCreate, WorkerOut

router = APIRouter(prefix="/workers", tags=["workers"])


@router.get("/", response_model=List[WorkerOut])
def list_workers(
    status: Optional[Literal["Liber", "In Deplasare"]] = None,
    active_only: bool = True,
    db: Session = Depends(get_db),
):
    q = db.query(Worker)
    if active_only:
        q = q.filter(Worker.active == True)
    if status:
        q = q.filter(Worker.status == status)
    return q.order_by(Worker.name.asc()).all()


@router.post("/", response_model=WorkerOut, status_code=status.HTTP_201_CREATED)
def create_worker(payload: WorkerCreate, db: Session = Depends(get_db)):
    name = payload.name.strip()
    if db.query(Worker).filter(Worker.name == name).first():
        raise HTTPException(status_code=400, detail="Worker already exists")
    w = Worker(name=name, status=WORKER_FREE, total_hours=0.0, active=True)
    db.add(w)
    db.commit()
    db.refresh(w)
    return w


@router.get("/{worker_id}", response_model=WorkerOut)
def get_worker(worker_id: int, db: Session = Depends(get_db)):
    w = db.query(Worker).get(worker_id)
    if not w:
        raise HTTPException(status_code=404, detail="Worker not found")
    return w
