from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow
from ..domain.worktime import worksheet_hours

class Worksheet(Base):
    __tablename__ = "Worksheet"

    WorksheetID = Column(Integer, primary_key=True, autoincrement=True)
    RequestID   = Column(Integer, ForeignKey("MaintenanceRequest.RequestID"), nullable=False, index=True)
    UserID      = Column(Integer, ForeignKey("AppUser.UserID"), nullable=False)
    StartTime   = Column(DateTime, nullable=False)
    EndTime     = Column(DateTime, nullable=False)
    Description = Column(String(1000))
    CreatedAt   = Column(DateTime, nullable=False, default=utcnow)

    request = relationship("MaintenanceRequest", back_populates="worksheets")

    @property
    def Hours(self):
        return worksheet_hours(self.StartTime, self.EndTime)
