# gearguard/routers/reports.py
from fastapi import APIRouter, Depends
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from ..core.api import ok
from ..core.db import get_db, utcnow
from ..core.security import get_current_user
from ..domain.constants import (
    ASSET_SCRAPPED, OPEN_REQUEST_STATUSES, REQ_IN_PROGRESS, REQ_REPAIRED, REQ_SCRAP, REQUEST_STATUSES,
)
from ..models import Equipment, MaintenanceRequest, Team
from ..models.user import AppUser

router = APIRouter(prefix="/reports", tags=["reports"], dependencies=[Depends(get_current_user)])


def _count(db: Session, *criteria) -> int:
    q = db.query(func.count(MaintenanceRequest.RequestID))
    if criteria:
        q = q.filter(*criteria)
    return q.scalar() or 0


# =========================
# DASHBOARD KPI'LARI
# =========================
@router.get("/dashboard")
def dashboard(current: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    now = utcnow()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    status_rows = (
        db.query(MaintenanceRequest.Status_s, func.count(MaintenanceRequest.RequestID))
          .group_by(MaintenanceRequest.Status_s)
          .all()
    )
    # hiç talebi olmayan durumlar da 0 ile görünsün
    distribution = {s: 0 for s in REQUEST_STATUSES}
    distribution.update({s: n for s, n in status_rows})

    team_rows = (
        db.query(
            Team.TeamID.label("teamId"),
            Team.Name.label("teamName"),
            func.count(MaintenanceRequest.RequestID).label("count"),
        )
        .join(MaintenanceRequest, MaintenanceRequest.MaintenanceTeamID == Team.TeamID)
        .group_by(Team.TeamID, Team.Name)
        .order_by(desc("count"), Team.Name)
        .all()
    )

    data = {
        "openRequests": _count(db, MaintenanceRequest.Status_s.in_(OPEN_REQUEST_STATUSES)),
        "highPriority": _count(db, MaintenanceRequest.Priority_s == "high",
                               MaintenanceRequest.Status_s != REQ_REPAIRED),
        "equipmentScrapped": db.query(func.count(Equipment.EquipmentID))
                               .filter(Equipment.Status_s == ASSET_SCRAPPED).scalar() or 0,
        "inProgress": _count(db, MaintenanceRequest.Status_s == REQ_IN_PROGRESS),
        "totalRequests": _count(db),
        "repairedThisMonth": _count(db, MaintenanceRequest.Status_s == REQ_REPAIRED,
                                    MaintenanceRequest.CreatedAt >= month_start),
        "statusDistribution": distribution,
        "myOpenRequests": _count(db, MaintenanceRequest.CreatedBy == current.UserID,
                                 MaintenanceRequest.Status_s.notin_((REQ_REPAIRED, REQ_SCRAP))),
        "requestsByTeam": [dict(r._mapping) for r in team_rows],
    }
    return ok(data, meta={"asOf": now.isoformat() + "Z"})
