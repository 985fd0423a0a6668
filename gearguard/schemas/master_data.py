# gearguard/schemas/master_data.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# ---- Departments ----
class DepartmentCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)
    Description: Optional[str] = None

class DepartmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    DepartmentID: int
    Name: str
    Description: Optional[str] = None

# ---- Categories ----
class CategoryCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)
    Description: Optional[str] = None

class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    CategoryID: int
    Name: str
    Description: Optional[str] = None
