from sqlalchemy import Column, Integer, String
from ..core.db import Base

class Department(Base):
    __tablename__ = "Department"

    DepartmentID = Column(Integer, primary_key=True, autoincrement=True)
    Name         = Column(String(200), nullable=False)
    Description  = Column(String(1000))
