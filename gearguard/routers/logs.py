# gearguard/routers/logs.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..schemas.activity import ActivityLogRead
from ..services.audit_service import list_logs

router = APIRouter(prefix="/logs", tags=["logs"], dependencies=[Depends(get_current_user)])


@router.get("")
def list_logs_ep(
    reference_type: Optional[str] = Query(None, max_length=30),
    reference_id: Optional[int] = Query(None, ge=1),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    rows = list_logs(db, reference_type=reference_type, reference_id=reference_id, skip=skip, limit=limit)
    items = [ActivityLogRead.model_validate(r) for r in rows]
    return ok(items, meta=list_meta(items, {"skip": skip, "limit": limit}))
