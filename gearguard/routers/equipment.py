# gearguard/routers/equipment.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..models.user import AppUser
from ..schemas.equipment import AssetStatusLiteral, EquipmentCreate, EquipmentRead, EquipmentUpdate
from ..schemas.maintenance import RequestOut
from ..services.equipment_service import (
    create_equipment, equipment_requests, get_equipment, list_equipment, update_equipment,
)

router = APIRouter(prefix="/equipment", tags=["equipment"], dependencies=[Depends(get_current_user)])


@router.get("")
def list_equipment_ep(
    status_s: Optional[AssetStatusLiteral] = Query(None, alias="status"),
    category_id: Optional[int] = Query(None, ge=1),
    department_id: Optional[int] = Query(None, ge=1),
    team_id: Optional[int] = Query(None, ge=1),
    q: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    rows = list_equipment(
        db,
        status_s=status_s,
        category_id=category_id,
        department_id=department_id,
        team_id=team_id,
        q=q,
    )
    items = [EquipmentRead.model_validate(r) for r in rows]
    return ok(items, meta=list_meta(items))

@router.get("/{equipment_id}")
def get_equipment_ep(equipment_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(EquipmentRead.model_validate(get_equipment(db, equipment_id)))

@router.get("/{equipment_id}/requests")
def equipment_requests_ep(equipment_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    rows, open_count = equipment_requests(db, equipment_id)
    items = [RequestOut.model_validate(r) for r in rows]
    return ok(items, meta=list_meta(items, {"openCount": open_count}))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_equipment_ep(payload: EquipmentCreate, current: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    # exclude_unset: ScrapDate / Status_s'den hangisinin gönderildiği önemli
    eq = create_equipment(db, data=payload.model_dump(exclude_unset=True), actor_id=current.UserID)
    return ok(EquipmentRead.model_validate(eq), status_code=status.HTTP_201_CREATED)

@router.api_route("/{equipment_id}", methods=["PUT", "PATCH"])
def update_equipment_ep(
    payload: EquipmentUpdate,
    equipment_id: int = Path(..., ge=1),
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    eq = update_equipment(
        db,
        equipment_id=equipment_id,
        changes=payload.model_dump(exclude_unset=True),
        actor_id=current.UserID,
    )
    return ok(EquipmentRead.model_validate(eq))
