# gearguard/services/worksheet_service.py
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import not_found
from ..domain.constants import REF_REQUEST, ROLE_ADMIN
from ..domain.worktime import is_overtime, total_logged_hours
from ..models import AppUser, MaintenanceRequest, Worksheet
from .audit_service import log_activity

logger = logging.getLogger(__name__)


def _get_request(db: Session, request_id: int) -> MaintenanceRequest:
    req = db.get(MaintenanceRequest, request_id)
    if not req:
        raise not_found("Request")
    return req


def list_worksheets(db: Session, request_id: int) -> Tuple[List[Worksheet], Dict[str, Any]]:
    """Satırlar + özet (toplam saat, tahmin, overtime). Her okumada yeniden hesaplanır."""
    req = _get_request(db, request_id)
    rows = (
        db.query(Worksheet)
          .filter(Worksheet.RequestID == request_id)
          .order_by(Worksheet.StartTime, Worksheet.WorksheetID)
          .all()
    )
    total = total_logged_hours(rows)
    summary = {
        "totalHours": round(total, 2),
        "estimatedHours": req.DurationHours,
        "overtime": is_overtime(total, req.DurationHours),
    }
    return rows, summary


def create_worksheet(
    db: Session, *,
    request_id: int,
    user_id: int,
    start_time: datetime,
    end_time: datetime,
    description: Optional[str] = None,
) -> Worksheet:
    try:
        _get_request(db, request_id)
        # ters aralık saklanır, saat hesabında 0 sayılır
        ws = Worksheet(
            RequestID=request_id,
            UserID=user_id,
            StartTime=start_time,
            EndTime=end_time,
            Description=description,
        )
        db.add(ws)
        db.flush()
        log_activity(db, reference_type=REF_REQUEST, reference_id=request_id,
                     action=f"worksheet #{ws.WorksheetID} logged", performed_by=user_id)
        db.commit()
        db.refresh(ws)
        return ws
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("create_worksheet db error (RequestID=%s): %s", request_id, getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not create worksheet")


def delete_worksheet(db: Session, *, worksheet_id: int, actor: AppUser) -> None:
    try:
        ws = db.get(Worksheet, worksheet_id)
        if not ws:
            raise not_found("Worksheet")
        if ws.UserID != actor.UserID and actor.Role != ROLE_ADMIN:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own worksheets")
        log_activity(db, reference_type=REF_REQUEST, reference_id=ws.RequestID,
                     action=f"worksheet #{ws.WorksheetID} deleted", performed_by=actor.UserID)
        db.delete(ws)
        db.commit()
    except HTTPException:
        db.rollback()
        raise
