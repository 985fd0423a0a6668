# gearguard/services/team_service.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core.errors import not_found
from ..domain.constants import REF_TEAM
from ..models import Team, TeamMember
from .audit_service import log_activity
from .membership import ensure_users_exist, replace_links

logger = logging.getLogger(__name__)


def _sync_members(db: Session, team: Team, member_ids: Optional[List[int]]) -> None:
    # None -> üyelere dokunma
    if member_ids is None:
        return
    ensure_users_exist(db, member_ids)
    replace_links(db, team, relation="member_links", link_model=TeamMember,
                  parent_key="TeamID", child_key="UserID", child_ids=member_ids)


def list_teams(db: Session) -> List[Team]:
    return db.query(Team).options(selectinload(Team.member_links)).order_by(Team.TeamID).all()


def get_team(db: Session, team_id: int) -> Team:
    team = db.get(Team, team_id)
    if not team:
        raise not_found("Team")
    return team


def create_team(db: Session, *, data: Dict[str, Any], actor_id: int) -> Team:
    """data: TeamCreate.model_dump()"""
    member_ids = data.pop("MemberIDs", None)
    try:
        team = Team(**data)
        db.add(team)
        db.flush()
        _sync_members(db, team, member_ids)
        log_activity(db, reference_type=REF_TEAM, reference_id=team.TeamID,
                     action="created", performed_by=actor_id)
        db.commit()
        db.refresh(team)
        return team
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("create_team db error: %s", getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not create team")


def update_team(db: Session, *, team_id: int, changes: Dict[str, Any], actor_id: int) -> Team:
    """changes: TeamUpdate.model_dump(exclude_unset=True)"""
    member_ids = changes.pop("MemberIDs", None)
    try:
        team = get_team(db, team_id)
        for k, v in changes.items():
            if k == "Name" and v is None:
                continue
            setattr(team, k, v)
        _sync_members(db, team, member_ids)
        log_activity(db, reference_type=REF_TEAM, reference_id=team.TeamID,
                     action="updated", performed_by=actor_id)
        db.commit()
        db.refresh(team)
        return team
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("update_team db error (TeamID=%s): %s", team_id, getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail="db_error: could not update team")
