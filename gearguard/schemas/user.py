from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel, EmailStr, Field, ConfigDict

from .common import IdList

RoleLiteral = Literal["admin", "technician", "employee"]

class UserRegister(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    full_name: str = Field(min_length=1, max_length=100)

class UserCreate(UserRegister):
    role: RoleLiteral = "employee"
    department_id: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True
    team_ids: Optional[IdList] = None

class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    department_id: Optional[int] = Field(default=None, ge=1)
    role: Optional[RoleLiteral] = None
    is_active: Optional[bool] = None
    team_ids: Optional[IdList] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)
    current_password: Optional[str] = None

class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    UserID: int
    Username: str
    FullName: str
    Email: str
    Role: RoleLiteral
    IsActive: bool
    DepartmentID: Optional[int] = None
    CreatedAt: Optional[datetime] = None
    TeamIDs: List[int] = []

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class ForgotPasswordIn(BaseModel):
    email: EmailStr

class ResetPasswordIn(BaseModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=6, max_length=128)

class MessageOut(BaseModel):
    message: str
