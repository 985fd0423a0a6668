from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from ..core.db import Base, utcnow

class ActivityLog(Base):
    """Append-only denetim kaydı; güncellenmez, silinmez."""
    __tablename__ = "ActivityLog"

    LogID         = Column(Integer, primary_key=True, autoincrement=True)
    ReferenceType = Column(String(30), nullable=False, index=True)  # 'equipment' | 'request' | ...
    ReferenceID   = Column(Integer, nullable=False, index=True)
    Action        = Column(String(200), nullable=False)
    PerformedBy   = Column(Integer, ForeignKey("AppUser.UserID"), nullable=False)
    Timestamp     = Column(DateTime, nullable=False, default=utcnow)
