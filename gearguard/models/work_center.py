from sqlalchemy import Column, Integer, String, Float, DECIMAL, JSON, CheckConstraint, text
from ..core.db import Base
from ..domain.constants import ASSET_ACTIVE

class WorkCenter(Base):
    __tablename__ = "WorkCenter"

    WorkCenterID           = Column(Integer, primary_key=True, autoincrement=True)
    Name                   = Column(String(200), nullable=False)
    Code                   = Column(String(50),  nullable=False, unique=True)
    Tag                    = Column(String(100))
    AlternativeWorkCenters = Column(JSON, nullable=False, default=list)
    CostPerHour            = Column(DECIMAL(10, 2), nullable=False, default=0)
    Capacity               = Column(Float, nullable=False, default=1)
    TimeEfficiency         = Column(Float, nullable=False, default=100)
    OEETarget              = Column(Float, nullable=False, default=0)
    Status_s               = Column(String(20), nullable=False, default=ASSET_ACTIVE, server_default=text("'active'"))

    __table_args__ = (
        CheckConstraint("Status_s in ('active','scrapped')", name="CK_WorkCenter_Status"),
        CheckConstraint("CostPerHour >= 0", name="CK_WorkCenter_Cost_NonNegative"),
    )
