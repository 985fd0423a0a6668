# gearguard/schemas/equipment.py
from datetime import date, datetime
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, Field

from .common import UTCDateTime

AssetStatusLiteral = Literal["active", "scrapped"]

class EquipmentCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)
    SerialNumber: str = Field(min_length=1, max_length=100)
    CategoryID: int = Field(ge=1)
    DepartmentID: Optional[int] = Field(default=None, ge=1)
    AssignedEmployeeID: Optional[int] = Field(default=None, ge=1)
    Location: Optional[str] = None
    PurchaseDate: Optional[date] = None
    WarrantyExpiryDate: Optional[date] = None
    MaintenanceTeamID: Optional[int] = Field(default=None, ge=1)
    DefaultTechnicianID: Optional[int] = Field(default=None, ge=1)
    Status_s: Optional[AssetStatusLiteral] = None
    AssignedDate: Optional[UTCDateTime] = None
    ScrapDate: Optional[UTCDateTime] = None
    Notes: Optional[str] = None

class EquipmentUpdate(BaseModel):
    # Kısmi güncelleme: sadece gönderilen alanlar yazılır (exclude_unset)
    Name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    SerialNumber: Optional[str] = Field(default=None, min_length=1, max_length=100)
    CategoryID: Optional[int] = Field(default=None, ge=1)
    DepartmentID: Optional[int] = Field(default=None, ge=1)
    AssignedEmployeeID: Optional[int] = Field(default=None, ge=1)
    Location: Optional[str] = None
    PurchaseDate: Optional[date] = None
    WarrantyExpiryDate: Optional[date] = None
    MaintenanceTeamID: Optional[int] = Field(default=None, ge=1)
    DefaultTechnicianID: Optional[int] = Field(default=None, ge=1)
    Status_s: Optional[AssetStatusLiteral] = None
    AssignedDate: Optional[UTCDateTime] = None
    ScrapDate: Optional[UTCDateTime] = None
    Notes: Optional[str] = None

class EquipmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    EquipmentID: int
    Name: str
    SerialNumber: str
    CategoryID: int
    DepartmentID: Optional[int] = None
    AssignedEmployeeID: Optional[int] = None
    Location: Optional[str] = None
    PurchaseDate: Optional[date] = None
    WarrantyExpiryDate: Optional[date] = None
    MaintenanceTeamID: Optional[int] = None
    DefaultTechnicianID: Optional[int] = None
    Status_s: AssetStatusLiteral
    AssignedDate: Optional[datetime] = None
    ScrapDate: Optional[datetime] = None
    Notes: Optional[str] = None
