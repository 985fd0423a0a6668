from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..core.db import Base

class Team(Base):
    __tablename__ = "Team"

    TeamID         = Column(Integer, primary_key=True, autoincrement=True)
    Name           = Column(String(200), nullable=False)
    Specialization = Column(String(100))  # IT, Electrical, Mechanical
    Description    = Column(String(1000))

    # Üyeler join tablosu üzerinden (TeamMember)
    member_links = relationship("TeamMember", back_populates="team", cascade="all, delete-orphan")

    @property
    def MemberIDs(self):
        return [link.UserID for link in self.member_links]
