# gearguard/services/master_data_service.py
"""Departman ve kategori gibi sade ana veri tabloları."""
import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import not_found
from ..models import Category, Department

logger = logging.getLogger(__name__)

# model -> (PK kolonu, 404 mesajındaki ad)
_KINDS = {
    Department: ("DepartmentID", "Department"),
    Category: ("CategoryID", "Category"),
}


def create_entry(db: Session, model, *, name: str, description: Optional[str] = None):
    try:
        row = model(Name=name.strip(), Description=description)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        logger.warning("create %s db error: %s", model.__tablename__, getattr(e, "orig", e))
        raise HTTPException(status_code=400, detail=f"db_error: could not create {_KINDS[model][1].lower()}")


def list_entries(db: Session, model) -> List:
    pk, _ = _KINDS[model]
    return db.query(model).order_by(getattr(model, pk)).all()


def get_entry(db: Session, model, entry_id: int):
    row = db.get(model, entry_id)
    if not row:
        raise not_found(_KINDS[model][1])
    return row
