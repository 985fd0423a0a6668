# gearguard/services/membership.py
"""
N-N join tablolarının (TeamMember, RequestTechnician) senkronizasyonu.

Sözleşme: liste verilirse ebeveynin tüm satırları silinir ve listedeki her id
için bir satır eklenir (diff yok). Liste hiç verilmezse (None) dokunulmaz;
bu karar çağıran serviste verilir.
"""
from typing import Iterable, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from ..models import AppUser, Team


def _missing_ids(db: Session, column, ids: Iterable[int]) -> List[int]:
    wanted = set(ids)
    if not wanted:
        return []
    found = {row[0] for row in db.query(column).filter(column.in_(wanted)).all()}
    return sorted(wanted - found)


def ensure_users_exist(db: Session, user_ids: Iterable[int]) -> None:
    missing = _missing_ids(db, AppUser.UserID, user_ids)
    if missing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: {missing}")


def ensure_teams_exist(db: Session, team_ids: Iterable[int]) -> None:
    missing = _missing_ids(db, Team.TeamID, team_ids)
    if missing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Team not found: {missing}")


def replace_links(
    db: Session,
    parent,
    *,
    relation: str,
    link_model,
    parent_key: str,
    child_key: str,
    child_ids: List[int],
) -> None:
    """
    parent_key: hem ebeveynin PK'sı hem link tablosundaki FK adı (örn. 'TeamID').
    Commit çağırana aittir.
    """
    db.flush()  # yeni ebeveynin PK'sı oluşsun
    # yüklü koleksiyon eski satırları tutmasın
    db.expire(parent, [relation])

    parent_id = getattr(parent, parent_key)
    db.query(link_model).filter(getattr(link_model, parent_key) == parent_id).delete()

    for child_id in child_ids:
        db.add(link_model(**{parent_key: parent_id, child_key: child_id}))
