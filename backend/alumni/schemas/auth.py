from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from alumni.models.user import UserRole
from alumni.schemas.base import CamelModel


class UserSignup(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: Optional[str] = None
    graduation_year: int


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class LoginUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: UserRole


class LoginResponse(BaseModel):
    token: str
    user: LoginUser


class MessageResponse(BaseModel):
    msg: str


class Identity(BaseModel):
    """Authenticated caller, decoded from the session token"""
    id: str
    email: Optional[str] = None
