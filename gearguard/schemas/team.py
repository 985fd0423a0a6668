# gearguard/schemas/team.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .common import IdList

class TeamCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)
    Specialization: Optional[str] = None
    Description: Optional[str] = None
    MemberIDs: Optional[IdList] = None

class TeamUpdate(BaseModel):
    # MemberIDs hiç gönderilmezse üyeler olduğu gibi kalır; [] -> hepsi silinir
    Name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    Specialization: Optional[str] = None
    Description: Optional[str] = None
    MemberIDs: Optional[IdList] = None

class TeamRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    TeamID: int
    Name: str
    Specialization: Optional[str] = None
    Description: Optional[str] = None
    MemberIDs: List[int] = []
