# gearguard/services/user_service.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core.errors import FieldConflict, not_found
from ..core.security import hash_password, revoke_user_sessions, verify_password
from ..domain.constants import REF_USER, ROLE_ADMIN, ROLE_EMPLOYEE
from ..models import AppUser, Department, TeamMember
from .audit_service import log_activity
from .membership import ensure_teams_exist, replace_links

logger = logging.getLogger(__name__)

# Sadece admin'in değiştirebileceği alanlar
ADMIN_ONLY_FIELDS = ("role", "is_active", "team_ids")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_username(db: Session, username: str) -> Optional[AppUser]:
    return db.query(AppUser).filter(AppUser.Username == username.strip()).first()


def get_user_by_email(db: Session, email: str) -> Optional[AppUser]:
    return db.query(AppUser).filter(AppUser.Email == normalize_email(email)).first()


def check_unique(db: Session, *, username: Optional[str] = None, email: Optional[str] = None,
                 exclude_id: Optional[int] = None) -> None:
    if username is not None:
        q = db.query(AppUser).filter(AppUser.Username == username)
        if exclude_id is not None:
            q = q.filter(AppUser.UserID != exclude_id)
        if q.first():
            raise FieldConflict("Username", "Username already exists")
    if email is not None:
        q = db.query(AppUser).filter(AppUser.Email == email)
        if exclude_id is not None:
            q = q.filter(AppUser.UserID != exclude_id)
        if q.first():
            raise FieldConflict("Email", "Email already exists")


def _check_department(db: Session, department_id: Optional[int]) -> None:
    if department_id is not None and not db.get(Department, department_id):
        raise not_found("Department")


def create_user(
    db: Session, *,
    username: str,
    email: str,
    password: str,
    full_name: str,
    role: str = ROLE_EMPLOYEE,
    department_id: Optional[int] = None,
    is_active: bool = True,
    team_ids: Optional[List[int]] = None,
    actor_id: Optional[int] = None,
    commit: bool = True,
) -> AppUser:
    username = username.strip()
    email = normalize_email(email)
    try:
        check_unique(db, username=username, email=email)
        _check_department(db, department_id)
        if team_ids:
            ensure_teams_exist(db, team_ids)

        user = AppUser(
            Username=username,
            FullName=full_name.strip(),
            Email=email,
            HashedPassword=hash_password(password),
            Role=role,
            IsActive=is_active,
            DepartmentID=department_id,
        )
        db.add(user)
        db.flush()

        if team_ids:
            replace_links(db, user, relation="team_links", link_model=TeamMember,
                          parent_key="UserID", child_key="TeamID", child_ids=team_ids)

        log_activity(db, reference_type=REF_USER, reference_id=user.UserID,
                     action="created", performed_by=actor_id or user.UserID)
        if commit:
            db.commit()
            db.refresh(user)
        return user
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("create_user db error: %s", getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not create user")


def list_users(db: Session, *, role: Optional[str] = None, active: Optional[bool] = None) -> List[AppUser]:
    q = db.query(AppUser).options(selectinload(AppUser.team_links))
    if role:
        q = q.filter(AppUser.Role == role)
    if active is not None:
        q = q.filter(AppUser.IsActive == active)
    return q.order_by(AppUser.UserID).all()


def get_user(db: Session, user_id: int) -> AppUser:
    user = db.get(AppUser, user_id)
    if not user:
        raise not_found("User")
    return user


def update_user(db: Session, *, user_id: int, changes: Dict[str, Any], actor: AppUser) -> AppUser:
    """
    changes: UserUpdate.model_dump(exclude_unset=True)
    Kendi şifresini değiştiren kullanıcıdan mevcut şifre istenir; admin başkasının
    şifresini doğrudan koyabilir.
    """
    try:
        user = get_user(db, user_id)
        is_admin = actor.Role == ROLE_ADMIN
        is_self = actor.UserID == user.UserID

        if not (is_admin or is_self):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only edit your own profile")
        if not is_admin and any(f in changes for f in ADMIN_ONLY_FIELDS):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can change role, status or teams")

        new_password = changes.get("password")
        if new_password:
            if is_self:
                current = changes.get("current_password")
                if not current:
                    raise HTTPException(status_code=400, detail="Current password is required to set a new password")
                if not verify_password(current, user.HashedPassword):
                    raise HTTPException(status_code=400, detail="Current password is incorrect")
            user.HashedPassword = hash_password(new_password)
            user.ResetToken = None
            user.ResetTokenExpiry = None

        if changes.get("full_name") is not None:
            user.FullName = changes["full_name"].strip()
        if changes.get("email") is not None:
            email = normalize_email(changes["email"])
            check_unique(db, email=email, exclude_id=user.UserID)
            user.Email = email
        if "department_id" in changes:
            _check_department(db, changes["department_id"])
            user.DepartmentID = changes["department_id"]
        if changes.get("role") is not None:
            user.Role = changes["role"]
        if changes.get("is_active") is not None:
            user.IsActive = changes["is_active"]
            if not user.IsActive:
                revoke_user_sessions(db, user.UserID)

        team_ids = changes.get("team_ids")
        if team_ids is not None:
            ensure_teams_exist(db, team_ids)
            replace_links(db, user, relation="team_links", link_model=TeamMember,
                          parent_key="UserID", child_key="TeamID", child_ids=team_ids)

        log_activity(db, reference_type=REF_USER, reference_id=user.UserID,
                     action="updated", performed_by=actor.UserID)
        db.commit()
        db.refresh(user)
        return user
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("update_user db error (UserID=%s): %s", user_id, getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not update user")
