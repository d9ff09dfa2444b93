from pydantic import field_validator
from typing import List, Optional
from datetime import datetime, timezone

from alumni.schemas.base import CamelModel
from alumni.schemas.user import UserRef


# ============================================
# Events
# ============================================

class EventCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None

    @field_validator("date")
    @classmethod
    def to_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Columns are timezone-naive UTC"""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class EventResponse(EventCreate):
    id: str
    creator_id: Optional[str] = None
    creator: Optional[UserRef] = None


# ============================================
# News
# ============================================

class NewsCreate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None


class NewsResponse(NewsCreate):
    id: str
    author_id: Optional[str] = None
    author: Optional[UserRef] = None
    date: datetime


# ============================================
# Forums
# ============================================

class ForumThreadCreate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None


class ForumReplyCreate(CamelModel):
    content: Optional[str] = None


class ForumReplyResponse(CamelModel):
    id: int
    content: Optional[str] = None
    author_id: Optional[str] = None
    author: Optional[UserRef] = None
    date: datetime


class ForumThreadResponse(ForumThreadCreate):
    id: str
    author_id: Optional[str] = None
    author: Optional[UserRef] = None
    date: datetime
    replies: List[ForumReplyResponse] = []


# ============================================
# Gallery
# ============================================

class GalleryResponse(CamelModel):
    id: str
    url: str
    caption: Optional[str] = None
    uploader_id: Optional[str] = None
    uploader: Optional[UserRef] = None
    date: datetime


# ============================================
# Board minutes
# ============================================

class BoardMinuteResponse(CamelModel):
    id: str
    title: str
    file_url: str
    date: datetime
