# gearguard/routers/work_centers.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..models.user import AppUser
from ..schemas.work_center import WorkCenterCreate, WorkCenterRead, WorkCenterUpdate
from ..services.work_center_service import (
    create_work_center, get_work_center, list_work_centers, update_work_center,
)

router = APIRouter(prefix="/work-centers", tags=["work-centers"], dependencies=[Depends(get_current_user)])


@router.get("")
def list_work_centers_ep(
    status_s: Optional[Literal["active", "scrapped"]] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    items = [WorkCenterRead.model_validate(w) for w in list_work_centers(db, status_s=status_s)]
    return ok(items, meta=list_meta(items))

@router.get("/{work_center_id}")
def get_work_center_ep(work_center_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(WorkCenterRead.model_validate(get_work_center(db, work_center_id)))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_work_center_ep(payload: WorkCenterCreate, current: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    wc = create_work_center(db, data=payload.model_dump(), actor_id=current.UserID)
    return ok(WorkCenterRead.model_validate(wc), status_code=status.HTTP_201_CREATED)

@router.api_route("/{work_center_id}", methods=["PUT", "PATCH"])
def update_work_center_ep(
    payload: WorkCenterUpdate,
    work_center_id: int = Path(..., ge=1),
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    wc = update_work_center(
        db,
        work_center_id=work_center_id,
        changes=payload.model_dump(exclude_unset=True),
        actor_id=current.UserID,
    )
    return ok(WorkCenterRead.model_validate(wc))
