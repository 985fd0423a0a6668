from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base

class TeamMember(Base):
    __tablename__ = "TeamMember"

    ID     = Column(Integer, primary_key=True, autoincrement=True)
    TeamID = Column(Integer, ForeignKey("Team.TeamID"),    nullable=False, index=True)
    UserID = Column(Integer, ForeignKey("AppUser.UserID"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("TeamID", "UserID", name="UQ_TeamMember_Team_User"),
    )

    team = relationship("Team",    back_populates="member_links")
    user = relationship("AppUser", back_populates="team_links")
