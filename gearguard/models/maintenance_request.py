from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, text
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow
from ..domain.constants import REQ_NEW, TARGET_EQUIPMENT
from ..domain.worktime import total_logged_hours, is_overtime

class MaintenanceRequest(Base):
    __tablename__ = "MaintenanceRequest"

    RequestID            = Column(Integer, primary_key=True, autoincrement=True)
    Subject              = Column(String(200), nullable=False)
    Description_s        = Column(String(2000), nullable=False)
    Instructions         = Column(String(2000))
    RequestType          = Column(String(20), nullable=False)
    MaintenanceFor       = Column(String(20), nullable=False, default=TARGET_EQUIPMENT, server_default=text("'equipment'"))
    EquipmentID          = Column(Integer, ForeignKey("Equipment.EquipmentID"))
    WorkCenterID         = Column(Integer, ForeignKey("WorkCenter.WorkCenterID"))
    MaintenanceTeamID    = Column(Integer, ForeignKey("Team.TeamID"))
    AssignedTechnicianID = Column(Integer, ForeignKey("AppUser.UserID"))
    ScheduledDate        = Column(DateTime)
    ActualStartDate      = Column(DateTime)
    CompletedDate        = Column(DateTime)
    DurationHours        = Column(Integer)
    Priority_s           = Column(String(10), nullable=False, server_default=text("'medium'"), default="medium")
    Status_s             = Column(String(20), nullable=False, server_default=text("'new'"), default=REQ_NEW)
    CreatedBy            = Column(Integer, ForeignKey("AppUser.UserID"), nullable=False)
    CreatedAt            = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("Status_s in ('new','in_progress','repaired','scrap')", name="CK_Request_Status"),
        CheckConstraint("Priority_s in ('low','medium','high')", name="CK_Request_Priority"),
        CheckConstraint("RequestType in ('corrective','preventive')", name="CK_Request_Type"),
        CheckConstraint("MaintenanceFor in ('equipment','work_center')", name="CK_Request_Target"),
    )

    equipment        = relationship("Equipment", back_populates="requests")
    work_center      = relationship("WorkCenter")
    # N-N teknisyen ataması (AssignedTechnicianID'den bağımsız)
    technician_links = relationship("RequestTechnician", back_populates="request", cascade="all, delete-orphan")
    worksheets       = relationship("Worksheet", back_populates="request", cascade="all, delete-orphan")

    @property
    def TechnicianIDs(self):
        return [link.TechnicianID for link in self.technician_links]

    # Kayıtlı tutulmaz, her okumada worksheet'lerden yeniden hesaplanır
    @property
    def LoggedHours(self):
        return round(total_logged_hours(self.worksheets), 2)

    @property
    def Overtime(self):
        return is_overtime(total_logged_hours(self.worksheets), self.DurationHours)
