# gearguard/routers/maintenance.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..models.user import AppUser
from ..schemas.common import to_naive_utc
from ..schemas.maintenance import PriorityLiteral, RequestCreate, RequestOut, RequestUpdate, StatusLiteral
from ..services.maintenance_service import create_request, get_request, list_requests, update_request

router = APIRouter(prefix="/requests", tags=["requests"], dependencies=[Depends(get_current_user)])


@router.get("")
def list_requests_ep(
    status_s: Optional[StatusLiteral] = Query(None, alias="status"),
    priority: Optional[PriorityLiteral] = Query(None),
    team_id: Optional[int] = Query(None, ge=1),
    equipment_id: Optional[int] = Query(None, ge=1),
    technician_id: Optional[int] = Query(None, ge=1),
    created_by: Optional[int] = Query(None, ge=1),
    scheduled_from: Optional[datetime] = Query(None, description="UTC, dahil"),
    scheduled_to: Optional[datetime] = Query(None, description="UTC, hariç"),
    db: Session = Depends(get_db),
):
    rows = list_requests(
        db,
        status_s=status_s,
        priority=priority,
        team_id=team_id,
        equipment_id=equipment_id,
        technician_id=technician_id,
        created_by=created_by,
        scheduled_from=to_naive_utc(scheduled_from),
        scheduled_to=to_naive_utc(scheduled_to),
    )
    items = [RequestOut.model_validate(r) for r in rows]
    return ok(items, meta=list_meta(items))

@router.get("/{request_id}")
def get_request_ep(request_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(RequestOut.model_validate(get_request(db, request_id)))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_request_ep(payload: RequestCreate, current: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    req = create_request(db, data=payload.model_dump(), actor_id=current.UserID)
    return ok(RequestOut.model_validate(req), status_code=status.HTTP_201_CREATED)

@router.api_route("/{request_id}", methods=["PUT", "PATCH"])
def update_request_ep(
    payload: RequestUpdate,
    request_id: int = Path(..., ge=1),
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    req = update_request(
        db,
        request_id=request_id,
        changes=payload.model_dump(exclude_unset=True),
        actor_id=current.UserID,
    )
    return ok(RequestOut.model_validate(req))
