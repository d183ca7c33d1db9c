# fieldops/routers/stores.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Store
from ..schemas.dashboard import StoreOut

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("", response_model=List[StoreOut])
def list_stores(
    ids: Optional[List[int]] = Query(None),
    db: Session = Depends(get_db),
):
    q = db.query(Store)
    if ids:
        q = q.filter(Store.store_id.in_(ids))
    return q.order_by(Store.store_id.asc()).all()
