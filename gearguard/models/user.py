from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint, text, true
)
from sqlalchemy.orm import relationship
from ..core.db import Base, utcnow
from ..domain.constants import ALLOWED_ROLES, ROLE_EMPLOYEE

class AppUser(Base):
    __tablename__ = "AppUser"

    UserID           = Column(Integer, primary_key=True, autoincrement=True)
    Username         = Column(String(50),  nullable=False, unique=True)
    FullName         = Column(String(100), nullable=False)
    Email            = Column(String(200), nullable=False, unique=True)
    HashedPassword   = Column(String(255), nullable=False)
    Role             = Column(String(20),  nullable=False, default=ROLE_EMPLOYEE, server_default=text("'employee'"))
    IsActive         = Column(Boolean,     nullable=False, default=True, server_default=true())
    DepartmentID     = Column(Integer, ForeignKey("Department.DepartmentID"))
    CreatedAt        = Column(DateTime,    nullable=False, default=utcnow)
    # Şifre sıfırlama (tek kullanımlık)
    ResetToken       = Column(String(128))
    ResetTokenExpiry = Column(DateTime)

    __table_args__ = (
        CheckConstraint(
            "Role in ({})".format(",".join(f"'{r}'" for r in ALLOWED_ROLES)),
            name="CK_AppUser_Role"
        ),
    )

    team_links = relationship("TeamMember", back_populates="user", cascade="all, delete-orphan")
    sessions   = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    @property
    def TeamIDs(self):
        return [link.TeamID for link in self.team_links]
