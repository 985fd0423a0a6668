# gearguard/routers/users.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user, require_roles
from ..domain.constants import ROLE_ADMIN
from ..models.user import AppUser
from ..schemas.user import RoleLiteral, UserCreate, UserRead, UserUpdate
from ..services.user_service import create_user, get_user, list_users, update_user

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_current_user)])

AdminOnly = require_roles(ROLE_ADMIN)


@router.get("")
def list_users_ep(
    role: Optional[RoleLiteral] = Query(None),
    active: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    items = [UserRead.model_validate(u) for u in list_users(db, role=role, active=active)]
    return ok(items, meta=list_meta(items))

@router.get("/{user_id}")
def get_user_ep(user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(UserRead.model_validate(get_user(db, user_id)))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_user_ep(payload: UserCreate, current: AppUser = Depends(AdminOnly), db: Session = Depends(get_db)):
    user = create_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        role=payload.role,
        department_id=payload.department_id,
        is_active=payload.is_active,
        team_ids=payload.team_ids,
        actor_id=current.UserID,
    )
    return ok(UserRead.model_validate(user), status_code=status.HTTP_201_CREATED)

@router.patch("/{user_id}")
def update_user_ep(
    payload: UserUpdate,
    user_id: int = Path(..., ge=1),
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = update_user(db, user_id=user_id, changes=payload.model_dump(exclude_unset=True), actor=current)
    return ok(UserRead.model_validate(user))
