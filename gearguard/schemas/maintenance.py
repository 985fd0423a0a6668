# gearguard/schemas/maintenance.py
from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common import IdList, UTCDateTime

# Tek tip durum kümesi (kanban aşamaları)
StatusLiteral = Literal["new", "in_progress", "repaired", "scrap"]
PriorityLiteral = Literal["low", "medium", "high"]
RequestTypeLiteral = Literal["corrective", "preventive"]
TargetLiteral = Literal["equipment", "work_center"]

# ---- Requests ----
class RequestCreate(BaseModel):
    Subject: str = Field(min_length=1, max_length=200)
    Description_s: str = Field(min_length=1, max_length=2000)
    Instructions: Optional[str] = None
    RequestType: RequestTypeLiteral = "corrective"
    MaintenanceFor: TargetLiteral = "equipment"
    EquipmentID: Optional[int] = Field(default=None, ge=1)
    WorkCenterID: Optional[int] = Field(default=None, ge=1)
    MaintenanceTeamID: Optional[int] = Field(default=None, ge=1)
    AssignedTechnicianID: Optional[int] = Field(default=None, ge=1)
    ScheduledDate: Optional[UTCDateTime] = None
    ActualStartDate: Optional[UTCDateTime] = None
    CompletedDate: Optional[UTCDateTime] = None
    DurationHours: Optional[int] = Field(default=None, ge=0)
    Priority_s: PriorityLiteral = "medium"
    Status_s: StatusLiteral = "new"
    # Sunucu tarafında oturumdaki kullanıcı ile ezilir
    CreatedBy: Optional[int] = None
    TechnicianIDs: Optional[IdList] = None

    @model_validator(mode="after")
    def _check_target(self):
        if self.MaintenanceFor == "equipment" and self.EquipmentID is None:
            raise ValueError("EquipmentID is required when MaintenanceFor is 'equipment'")
        if self.MaintenanceFor == "work_center" and self.WorkCenterID is None:
            raise ValueError("WorkCenterID is required when MaintenanceFor is 'work_center'")
        if self.RequestType == "preventive" and self.ScheduledDate is None:
            raise ValueError("ScheduledDate is required for preventive requests")
        return self

class RequestUpdate(BaseModel):
    Subject: Optional[str] = Field(default=None, min_length=1, max_length=200)
    Description_s: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    Instructions: Optional[str] = None
    RequestType: Optional[RequestTypeLiteral] = None
    MaintenanceFor: Optional[TargetLiteral] = None
    EquipmentID: Optional[int] = Field(default=None, ge=1)
    WorkCenterID: Optional[int] = Field(default=None, ge=1)
    MaintenanceTeamID: Optional[int] = Field(default=None, ge=1)
    AssignedTechnicianID: Optional[int] = Field(default=None, ge=1)
    ScheduledDate: Optional[UTCDateTime] = None
    ActualStartDate: Optional[UTCDateTime] = None
    CompletedDate: Optional[UTCDateTime] = None
    DurationHours: Optional[int] = Field(default=None, ge=0)
    Priority_s: Optional[PriorityLiteral] = None
    Status_s: Optional[StatusLiteral] = None
    # Gönderilmezse atamalar değişmez; [] -> tüm atamalar silinir
    TechnicianIDs: Optional[IdList] = None

class RequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    RequestID: int
    Subject: str
    Description_s: str
    Instructions: Optional[str] = None
    RequestType: RequestTypeLiteral
    MaintenanceFor: TargetLiteral
    EquipmentID: Optional[int] = None
    WorkCenterID: Optional[int] = None
    MaintenanceTeamID: Optional[int] = None
    AssignedTechnicianID: Optional[int] = None
    ScheduledDate: Optional[datetime] = None
    ActualStartDate: Optional[datetime] = None
    CompletedDate: Optional[datetime] = None
    DurationHours: Optional[int] = None
    Priority_s: PriorityLiteral
    Status_s: StatusLiteral
    CreatedBy: int
    CreatedAt: datetime
    TechnicianIDs: List[int] = []
    # Okuma anında worksheet'lerden hesaplanır
    LoggedHours: float = 0.0
    Overtime: bool = False

# ---- Worksheets ----
class WorksheetCreate(BaseModel):
    StartTime: UTCDateTime
    EndTime: UTCDateTime
    Description: Optional[str] = Field(default=None, max_length=1000)

class WorksheetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    WorksheetID: int
    RequestID: int
    UserID: int
    StartTime: datetime
    EndTime: datetime
    Description: Optional[str] = None
    CreatedAt: datetime
    Hours: float
