from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base

class RequestTechnician(Base):
    __tablename__ = "RequestTechnician"

    ID           = Column(Integer, primary_key=True, autoincrement=True)
    RequestID    = Column(Integer, ForeignKey("MaintenanceRequest.RequestID"), nullable=False, index=True)
    TechnicianID = Column(Integer, ForeignKey("AppUser.UserID"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("RequestID", "TechnicianID", name="UQ_RequestTechnician_Request_Tech"),
    )

    request = relationship("MaintenanceRequest", back_populates="technician_links")
