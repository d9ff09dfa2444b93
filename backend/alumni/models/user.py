from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, Text
from datetime import datetime
import enum

from alumni.core.database import Base
from alumni.core.types import GUID, generate_uuid


class UserRole(str, enum.Enum):
    """User roles"""
    ALUMNI = "alumni"
    ADMIN = "admin"


class User(Base):
    """Alumni account"""
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Profile fields
    name = Column(String(255), nullable=True)
    graduation_year = Column(Integer, nullable=True, index=True)
    bio = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    profile_pic = Column(Text, nullable=True)  # Upload sink URL

    role = Column(SQLEnum(UserRole), default=UserRole.ALUMNI, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User {self.email}>"
