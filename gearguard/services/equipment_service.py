# gearguard/services/equipment_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core.db import utcnow
from ..core.errors import FieldConflict, not_found
from ..domain.constants import ASSET_SCRAPPED, OPEN_REQUEST_STATUSES, REF_EQUIPMENT
from ..domain.lifecycle import equipment_scrap_state
from ..models import AppUser, Category, Department, Equipment, MaintenanceRequest, Team
from .audit_service import log_activity

logger = logging.getLogger(__name__)

# Boş (null) yazılamayacak kolonlar; açıkça null gelirse atlanır
_REQUIRED = ("Name", "SerialNumber", "CategoryID")

# FK kolonu -> (model, 404 adı)
_REFERENCES = {
    "CategoryID": (Category, "Category"),
    "DepartmentID": (Department, "Department"),
    "MaintenanceTeamID": (Team, "Team"),
    "AssignedEmployeeID": (AppUser, "Employee"),
    "DefaultTechnicianID": (AppUser, "Technician"),
}


def _check_references(db: Session, values: Dict[str, Any]) -> None:
    for col, (model, label) in _REFERENCES.items():
        ref_id = values.get(col)
        if ref_id is not None and not db.get(model, ref_id):
            raise not_found(label)


def _check_serial(db: Session, serial: str, exclude_id: Optional[int] = None) -> None:
    q = db.query(Equipment).filter(Equipment.SerialNumber == serial)
    if exclude_id is not None:
        q = q.filter(Equipment.EquipmentID != exclude_id)
    if q.first():
        raise FieldConflict("SerialNumber", "Serial number already exists")


def get_equipment(db: Session, equipment_id: int) -> Equipment:
    eq = db.get(Equipment, equipment_id)
    if not eq:
        raise not_found("Equipment")
    return eq


def list_equipment(
    db: Session, *,
    status_s: Optional[str] = None,
    category_id: Optional[int] = None,
    department_id: Optional[int] = None,
    team_id: Optional[int] = None,
    q: Optional[str] = None,
) -> List[Equipment]:
    query = db.query(Equipment)
    if status_s:
        query = query.filter(Equipment.Status_s == status_s)
    if category_id is not None:
        query = query.filter(Equipment.CategoryID == category_id)
    if department_id is not None:
        query = query.filter(Equipment.DepartmentID == department_id)
    if team_id is not None:
        query = query.filter(Equipment.MaintenanceTeamID == team_id)
    if q:
        like = f"%{q.strip()}%"
        query = query.filter(or_(Equipment.Name.ilike(like), Equipment.SerialNumber.ilike(like)))
    return query.order_by(Equipment.EquipmentID).all()


def create_equipment(db: Session, *, data: Dict[str, Any], actor_id: int) -> Equipment:
    """data: EquipmentCreate.model_dump(exclude_unset=True)"""
    try:
        data = dict(data)
        data["SerialNumber"] = data["SerialNumber"].strip()
        _check_serial(db, data["SerialNumber"])
        _check_references(db, data)

        data.update(equipment_scrap_state(data, None, utcnow()))
        eq = Equipment(**data)
        db.add(eq)
        db.flush()

        log_activity(db, reference_type=REF_EQUIPMENT, reference_id=eq.EquipmentID,
                     action="created", performed_by=actor_id)
        db.commit()
        db.refresh(eq)
        return eq
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("create_equipment db error: %s", getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not create equipment")


def update_equipment(db: Session, *, equipment_id: int, changes: Dict[str, Any], actor_id: int) -> Equipment:
    """changes: EquipmentUpdate.model_dump(exclude_unset=True)"""
    try:
        eq = get_equipment(db, equipment_id)
        changes = {k: v for k, v in changes.items() if not (k in _REQUIRED and v is None)}

        if "SerialNumber" in changes:
            changes["SerialNumber"] = changes["SerialNumber"].strip()
            _check_serial(db, changes["SerialNumber"], exclude_id=eq.EquipmentID)
        _check_references(db, changes)

        prev_status = eq.Status_s
        changes.update(equipment_scrap_state(changes, eq.ScrapDate, utcnow()))
        for k, v in changes.items():
            setattr(eq, k, v)

        action = "updated"
        if eq.Status_s != prev_status:
            action = "scrapped" if eq.Status_s == ASSET_SCRAPPED else "reactivated"
        log_activity(db, reference_type=REF_EQUIPMENT, reference_id=eq.EquipmentID,
                     action=action, performed_by=actor_id)
        db.commit()
        db.refresh(eq)
        return eq
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("update_equipment db error (EquipmentID=%s): %s", equipment_id, getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not update equipment")


def scrap_equipment(db: Session, eq: Equipment, *, actor_id: int, reason: str) -> None:
    """
    Talep 'scrap' olduğunda ekipmanı hurdaya ayırır.
    Commit çağıran serviste (talep güncellemesiyle aynı transaction).
    """
    state = equipment_scrap_state({"Status_s": ASSET_SCRAPPED}, None, utcnow())
    eq.Status_s = state["Status_s"]
    eq.ScrapDate = state["ScrapDate"]
    log_activity(db, reference_type=REF_EQUIPMENT, reference_id=eq.EquipmentID,
                 action=f"scrapped: {reason}", performed_by=actor_id)


def equipment_requests(db: Session, equipment_id: int) -> Tuple[List[MaintenanceRequest], int]:
    get_equipment(db, equipment_id)
    rows = (
        db.query(MaintenanceRequest)
          .options(selectinload(MaintenanceRequest.technician_links), selectinload(MaintenanceRequest.worksheets))
          .filter(MaintenanceRequest.EquipmentID == equipment_id)
          .order_by(MaintenanceRequest.RequestID.desc())
          .all()
    )
    open_count = sum(1 for r in rows if r.Status_s in OPEN_REQUEST_STATUSES)
    return rows, open_count
