from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, CheckConstraint, text
from sqlalchemy.orm import relationship
from ..core.db import Base
from ..domain.constants import ASSET_ACTIVE

class Equipment(Base):
    __tablename__ = "Equipment"

    EquipmentID         = Column(Integer, primary_key=True, autoincrement=True)
    Name                = Column(String(200), nullable=False)
    SerialNumber        = Column(String(100), nullable=False, unique=True)
    CategoryID          = Column(Integer, ForeignKey("Category.CategoryID"), nullable=False)
    DepartmentID        = Column(Integer, ForeignKey("Department.DepartmentID"))
    AssignedEmployeeID  = Column(Integer, ForeignKey("AppUser.UserID"))
    Location            = Column(String(200))
    PurchaseDate        = Column(Date)
    WarrantyExpiryDate  = Column(Date)
    # Talep açılırken varsayılan olarak kullanılır
    MaintenanceTeamID   = Column(Integer, ForeignKey("Team.TeamID"))
    DefaultTechnicianID = Column(Integer, ForeignKey("AppUser.UserID"))
    Status_s            = Column(String(20), nullable=False, default=ASSET_ACTIVE, server_default=text("'active'"))
    AssignedDate        = Column(DateTime)
    ScrapDate           = Column(DateTime)
    Notes               = Column(String(2000))

    __table_args__ = (
        CheckConstraint("Status_s in ('active','scrapped')", name="CK_Equipment_Status"),
    )

    # 1 ekipman -> N talep
    requests = relationship("MaintenanceRequest", back_populates="equipment")
