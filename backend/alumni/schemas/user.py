from typing import Optional
from datetime import datetime

from alumni.models.user import UserRole
from alumni.schemas.base import CamelModel


class UserRef(CamelModel):
    """Related user as rendered inside other resources"""
    id: str
    name: Optional[str] = None


class DirectoryUserResponse(CamelModel):
    """Public directory entry - no password, no approval flag"""
    id: str
    email: str
    name: Optional[str] = None
    graduation_year: Optional[int] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    profile_pic: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None


class UserResponse(DirectoryUserResponse):
    """Full user record - never carries the password hash"""
    is_approved: bool


class UserApprovalUpdate(CamelModel):
    is_approved: bool
