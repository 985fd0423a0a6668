# gearguard/routers/worksheets.py
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..models.user import AppUser
from ..schemas.maintenance import WorksheetCreate, WorksheetOut
from ..services.worksheet_service import create_worksheet, delete_worksheet, list_worksheets

router = APIRouter(tags=["worksheets"], dependencies=[Depends(get_current_user)])


@router.get("/requests/{request_id}/worksheets")
def list_worksheets_ep(request_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    rows, summary = list_worksheets(db, request_id)
    items = [WorksheetOut.model_validate(w) for w in rows]
    return ok(items, meta=list_meta(items, summary))

@router.post("/requests/{request_id}/worksheets", status_code=status.HTTP_201_CREATED)
def create_worksheet_ep(
    payload: WorksheetCreate,
    request_id: int = Path(..., ge=1),
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ws = create_worksheet(
        db,
        request_id=request_id,
        user_id=current.UserID,
        start_time=payload.StartTime,
        end_time=payload.EndTime,
        description=payload.Description,
    )
    return ok(WorksheetOut.model_validate(ws), status_code=status.HTTP_201_CREATED)

@router.delete("/worksheets/{worksheet_id}")
def delete_worksheet_ep(
    worksheet_id: int = Path(..., ge=1),
    current: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    delete_worksheet(db, worksheet_id=worksheet_id, actor=current)
    return ok({"WorksheetID": worksheet_id, "deleted": True})
