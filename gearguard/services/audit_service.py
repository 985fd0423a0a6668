# gearguard/services/audit_service.py
"""
Activity log servisi. Kayıtlar append-only: güncelleme / silme yok.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.db import utcnow
from ..models import ActivityLog


def log_activity(
    db: Session, *,
    reference_type: str,
    reference_id: int,
    action: str,
    performed_by: int,
) -> ActivityLog:
    # commit çağıran serviste; ana yazma ile aynı transaction'a girer
    entry = ActivityLog(
        ReferenceType=reference_type,
        ReferenceID=reference_id,
        Action=action[:200],
        PerformedBy=performed_by,
        Timestamp=utcnow(),
    )
    db.add(entry)
    return entry


def list_logs(
    db: Session, *,
    reference_type: Optional[str] = None,
    reference_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 200,
) -> List[ActivityLog]:
    q = db.query(ActivityLog)
    if reference_type:
        q = q.filter(ActivityLog.ReferenceType == reference_type)
    if reference_id is not None:
        q = q.filter(ActivityLog.ReferenceID == reference_id)
    q = q.order_by(ActivityLog.Timestamp.desc(), ActivityLog.LogID.desc())
    return q.offset(max(0, skip)).limit(min(max(1, limit), 500)).all()
