# gearguard/services/work_center_service.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import FieldConflict, not_found
from ..domain.constants import REF_WORK_CENTER
from ..models import WorkCenter
from .audit_service import log_activity

logger = logging.getLogger(__name__)

_REQUIRED = ("Name", "Code", "AlternativeWorkCenters", "CostPerHour", "Capacity",
             "TimeEfficiency", "OEETarget", "Status_s")


def _check_code(db: Session, code: str, exclude_id: Optional[int] = None) -> None:
    q = db.query(WorkCenter).filter(WorkCenter.Code == code)
    if exclude_id is not None:
        q = q.filter(WorkCenter.WorkCenterID != exclude_id)
    if q.first():
        raise FieldConflict("Code", "Work center code already exists")


def list_work_centers(db: Session, *, status_s: Optional[str] = None) -> List[WorkCenter]:
    q = db.query(WorkCenter)
    if status_s:
        q = q.filter(WorkCenter.Status_s == status_s)
    return q.order_by(WorkCenter.WorkCenterID).all()


def get_work_center(db: Session, work_center_id: int) -> WorkCenter:
    wc = db.get(WorkCenter, work_center_id)
    if not wc:
        raise not_found("Work center")
    return wc


def create_work_center(db: Session, *, data: Dict[str, Any], actor_id: int) -> WorkCenter:
    try:
        data = dict(data)
        data["Code"] = data["Code"].strip()
        _check_code(db, data["Code"])
        wc = WorkCenter(**data)
        db.add(wc)
        db.flush()
        log_activity(db, reference_type=REF_WORK_CENTER, reference_id=wc.WorkCenterID,
                     action="created", performed_by=actor_id)
        db.commit()
        db.refresh(wc)
        return wc
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("create_work_center db error: %s", getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not create work center")


def update_work_center(db: Session, *, work_center_id: int, changes: Dict[str, Any], actor_id: int) -> WorkCenter:
    try:
        wc = get_work_center(db, work_center_id)
        changes = {k: v for k, v in changes.items() if not (k in _REQUIRED and v is None)}
        if "Code" in changes:
            changes["Code"] = changes["Code"].strip()
            _check_code(db, changes["Code"], exclude_id=wc.WorkCenterID)
        for k, v in changes.items():
            setattr(wc, k, v)
        log_activity(db, reference_type=REF_WORK_CENTER, reference_id=wc.WorkCenterID,
                     action="updated", performed_by=actor_id)
        db.commit()
        db.refresh(wc)
        return wc
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("update_work_center db error (WorkCenterID=%s): %s", work_center_id, getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not update work center")
