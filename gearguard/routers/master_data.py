# gearguard/routers/master_data.py
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.api import list_meta, ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..models import Category, Department
from ..schemas.master_data import CategoryCreate, CategoryRead, DepartmentCreate, DepartmentRead
from ..services.master_data_service import create_entry, get_entry, list_entries

departments = APIRouter(prefix="/departments", tags=["departments"], dependencies=[Depends(get_current_user)])
categories = APIRouter(prefix="/categories", tags=["categories"], dependencies=[Depends(get_current_user)])


# ---- Departments ----
@departments.get("")
def list_departments(db: Session = Depends(get_db)):
    items = [DepartmentRead.model_validate(r) for r in list_entries(db, Department)]
    return ok(items, meta=list_meta(items))

@departments.get("/{department_id}")
def get_department(department_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(DepartmentRead.model_validate(get_entry(db, Department, department_id)))

@departments.post("", status_code=status.HTTP_201_CREATED)
def create_department(payload: DepartmentCreate, db: Session = Depends(get_db)):
    row = create_entry(db, Department, name=payload.Name, description=payload.Description)
    return ok(DepartmentRead.model_validate(row), status_code=status.HTTP_201_CREATED)


# ---- Categories ----
@categories.get("")
def list_categories(db: Session = Depends(get_db)):
    items = [CategoryRead.model_validate(r) for r in list_entries(db, Category)]
    return ok(items, meta=list_meta(items))

@categories.get("/{category_id}")
def get_category(category_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(CategoryRead.model_validate(get_entry(db, Category, category_id)))

@categories.post("", status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    row = create_entry(db, Category, name=payload.Name, description=payload.Description)
    return ok(CategoryRead.model_validate(row), status_code=status.HTTP_201_CREATED)
