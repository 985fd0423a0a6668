# gearguard/services/maintenance_service.py
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core.errors import not_found
from ..domain.constants import REF_REQUEST, TARGET_EQUIPMENT, TARGET_WORK_CENTER
from ..domain.lifecycle import apply_equipment_defaults, apply_schedule_transition, needs_scrap_cascade
from ..models import AppUser, Equipment, MaintenanceRequest, RequestTechnician, Team, WorkCenter
from .audit_service import log_activity
from .equipment_service import scrap_equipment
from .membership import ensure_users_exist, replace_links

logger = logging.getLogger(__name__)

# null yazılamayan kolonlar
_REQUIRED = ("Subject", "Description_s", "RequestType", "MaintenanceFor", "Priority_s", "Status_s")

_REFERENCES = {
    "MaintenanceTeamID": (Team, "Team"),
    "AssignedTechnicianID": (AppUser, "Technician"),
}


def _invalid(msg: str) -> HTTPException:
    return HTTPException(status_code=422, detail=msg)


def _resolve_target(db: Session, values: Dict[str, Any]) -> Optional[Equipment]:
    """
    values: talebin birleşik (mevcut + değişiklik) hali.
    Hedef MaintenanceFor ile uyumlu olmalı; ekipman hedefliyse ekipmanı döner.
    """
    target = values.get("MaintenanceFor") or TARGET_EQUIPMENT
    if target == TARGET_EQUIPMENT:
        if values.get("EquipmentID") is None:
            raise _invalid("EquipmentID is required when MaintenanceFor is 'equipment'")
        eq = db.get(Equipment, values["EquipmentID"])
        if not eq:
            raise not_found("Equipment")
        return eq
    if target == TARGET_WORK_CENTER:
        if values.get("WorkCenterID") is None:
            raise _invalid("WorkCenterID is required when MaintenanceFor is 'work_center'")
        if not db.get(WorkCenter, values["WorkCenterID"]):
            raise not_found("Work center")
    return None


def _cascade_scrap(db: Session, req: MaintenanceRequest, actor_id: int) -> None:
    # talep 'scrap' ise bağlı ekipman da hurdaya; commit çağıranda
    if needs_scrap_cascade(req.Status_s, req.EquipmentID):
        eq = db.get(Equipment, req.EquipmentID)
        if eq is not None:
            scrap_equipment(db, eq, actor_id=actor_id, reason=f"request #{req.RequestID}")


def _check_references(db: Session, values: Dict[str, Any]) -> None:
    for col, (model, label) in _REFERENCES.items():
        ref_id = values.get(col)
        if ref_id is not None and not db.get(model, ref_id):
            raise not_found(label)


def _sync_technicians(db: Session, req: MaintenanceRequest, technician_ids: Optional[List[int]]) -> None:
    # None -> atamalara dokunma, [] -> hepsini sil
    if technician_ids is None:
        return
    ensure_users_exist(db, technician_ids)
    replace_links(db, req, relation="technician_links", link_model=RequestTechnician,
                  parent_key="RequestID", child_key="TechnicianID", child_ids=technician_ids)


def _query(db: Session):
    return db.query(MaintenanceRequest).options(
        selectinload(MaintenanceRequest.technician_links),
        selectinload(MaintenanceRequest.worksheets),
    )


# -------- Requests --------
def get_request(db: Session, request_id: int) -> MaintenanceRequest:
    req = _query(db).filter(MaintenanceRequest.RequestID == request_id).first()
    if not req:
        raise not_found("Request")
    return req


def list_requests(
    db: Session, *,
    status_s: Optional[str] = None,
    priority: Optional[str] = None,
    team_id: Optional[int] = None,
    equipment_id: Optional[int] = None,
    technician_id: Optional[int] = None,
    created_by: Optional[int] = None,
    scheduled_from: Optional[datetime] = None,
    scheduled_to: Optional[datetime] = None,
) -> List[MaintenanceRequest]:
    q = _query(db)
    if status_s:
        q = q.filter(MaintenanceRequest.Status_s == status_s)
    if priority:
        q = q.filter(MaintenanceRequest.Priority_s == priority)
    if team_id is not None:
        q = q.filter(MaintenanceRequest.MaintenanceTeamID == team_id)
    if equipment_id is not None:
        q = q.filter(MaintenanceRequest.EquipmentID == equipment_id)
    if technician_id is not None:
        # iki atama kanalından herhangi biri
        q = q.filter(or_(
            MaintenanceRequest.AssignedTechnicianID == technician_id,
            MaintenanceRequest.technician_links.any(RequestTechnician.TechnicianID == technician_id),
        ))
    if created_by is not None:
        q = q.filter(MaintenanceRequest.CreatedBy == created_by)
    # takvim görünümü
    if scheduled_from is not None:
        q = q.filter(MaintenanceRequest.ScheduledDate >= scheduled_from)
    if scheduled_to is not None:
        q = q.filter(MaintenanceRequest.ScheduledDate < scheduled_to)
    return q.order_by(MaintenanceRequest.RequestID.desc()).all()


def create_request(db: Session, *, data: Dict[str, Any], actor_id: int) -> MaintenanceRequest:
    """
    data: RequestCreate.model_dump()
    CreatedBy her zaman oturumdaki kullanıcıdır; istemcinin gönderdiği değer yok sayılır.
    """
    values = dict(data)
    technician_ids = values.pop("TechnicianIDs", None)
    values.pop("CreatedBy", None)
    try:
        equipment = _resolve_target(db, values)
        # hedefle ilgisiz referans tutulmaz
        if values.get("MaintenanceFor") == TARGET_WORK_CENTER:
            values["EquipmentID"] = None
        else:
            values["WorkCenterID"] = None

        values, technician_ids = apply_equipment_defaults(values, equipment, technician_ids)
        _check_references(db, values)

        req = MaintenanceRequest(**values, CreatedBy=actor_id)
        db.add(req)
        db.flush()
        _sync_technicians(db, req, technician_ids)
        _cascade_scrap(db, req, actor_id)

        log_activity(db, reference_type=REF_REQUEST, reference_id=req.RequestID,
                     action="created", performed_by=actor_id)
        db.commit()
        return get_request(db, req.RequestID)
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("create_request db error: %s", getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not create request")
    except Exception:
        db.rollback()
        logger.exception("create_request failed")
        raise


def update_request(db: Session, *, request_id: int, changes: Dict[str, Any], actor_id: int) -> MaintenanceRequest:
    """
    changes: RequestUpdate.model_dump(exclude_unset=True)

    Talep yazımı, teknisyen listesinin değişimi, ekipman hurda kaskadı ve
    activity log tek commit ile yazılır; biri başarısızsa hepsi geri alınır.
    """
    changes = dict(changes)
    technician_ids = changes.pop("TechnicianIDs", None)
    changes.pop("CreatedBy", None)
    changes = {k: v for k, v in changes.items() if not (k in _REQUIRED and v is None)}
    try:
        req = get_request(db, request_id)

        merged = {
            "MaintenanceFor": req.MaintenanceFor,
            "EquipmentID": req.EquipmentID,
            "WorkCenterID": req.WorkCenterID,
            "RequestType": req.RequestType,
            "ScheduledDate": req.ScheduledDate,
            **changes,
        }
        if {"MaintenanceFor", "EquipmentID", "WorkCenterID"} & changes.keys():
            _resolve_target(db, merged)
            if merged["MaintenanceFor"] == TARGET_WORK_CENTER:
                changes["EquipmentID"] = None
            else:
                changes["WorkCenterID"] = None
        if merged["RequestType"] == "preventive" and merged["ScheduledDate"] is None:
            raise _invalid("ScheduledDate is required for preventive requests")
        _check_references(db, changes)

        prev_status = req.Status_s
        changes = apply_schedule_transition(prev_status, changes)
        for k, v in changes.items():
            setattr(req, k, v)

        _sync_technicians(db, req, technician_ids)
        _cascade_scrap(db, req, actor_id)

        action = "updated"
        if req.Status_s != prev_status:
            action = f"status: {prev_status} -> {req.Status_s}"
        log_activity(db, reference_type=REF_REQUEST, reference_id=req.RequestID,
                     action=action, performed_by=actor_id)
        db.commit()
        return get_request(db, req.RequestID)
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("update_request db error (RequestID=%s): %s", request_id, getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not update request")
    except Exception:
        db.rollback()
        logger.exception("update_request failed (RequestID=%s)", request_id)
        raise
