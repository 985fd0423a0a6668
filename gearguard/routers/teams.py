# gearguard/routers/teams.py
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..models.user import AppUser
from ..schemas.team import TeamCreate, TeamRead, TeamUpdate
from ..services.team_service import create_team, get_team, list_teams, update_team

router = APIRouter(prefix="/teams", tags=["teams"], dependencies=[Depends(get_current_user)])


@router.get("")
def list_teams_ep(db: Session = Depends(get_db)):
    items = [TeamRead.model_validate(t) for t in list_teams(db)]
    return ok(items, meta=list_meta(items))

@router.get("/{team_id}")
def get_team_ep(team_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(TeamRead.model_validate(get_team(db, team_id)))

@router.post("", status_code=status.HTTP_201_CREATED)
def create_team_ep(payload: TeamCreate, current: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    team = create_team(db, data=payload.model_dump(), actor_id=current.UserID)
    return ok(TeamRead.model_validate(team), status_code=status.HTTP_201_CREATED)

@router.api_route("/{team_id}", methods=["PUT", "PATCH"])
def update_team_ep(
    payload: TeamUpdate,
    team_id: int = Path(..., ge=1),
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # MemberIDs gönderilmediyse exclude_unset onu düşürür -> üyeler korunur
    team = update_team(db, team_id=team_id, changes=payload.model_dump(exclude_unset=True), actor_id=current.UserID)
    return ok(TeamRead.model_validate(team))
