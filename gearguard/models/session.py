from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow

class UserSession(Base):
    """Kalıcı oturum deposu; cookie içindeki JWT 'sid' ile bu satırı gösterir."""
    __tablename__ = "UserSession"

    SessionID = Column(String(64), primary_key=True)
    UserID    = Column(Integer, ForeignKey("AppUser.UserID"), nullable=False, index=True)
    CreatedAt = Column(DateTime, nullable=False, default=utcnow)
    ExpiresAt = Column(DateTime, nullable=False)

    user = relationship("AppUser", back_populates="sessions")
