# Re-export all models for convenient imports
from alumni.models.user import User, UserRole
from alumni.models.event import Event
from alumni.models.news import News
from alumni.models.forum import ForumThread, ForumReply
from alumni.models.gallery import Gallery
from alumni.models.donation import Donation
from alumni.models.board_minute import BoardMinute

__all__ = [
    # User
    "User",
    "UserRole",
    # Community content
    "Event",
    "News",
    "ForumThread",
    "ForumReply",
    "Gallery",
    "BoardMinute",
    # Payments
    "Donation",
]
