from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from datetime import datetime

from alumni.core.database import Base
from alumni.core.types import GUID, generate_uuid


class ForumThread(Base):
    """Discussion thread"""
    __tablename__ = "forum_threads"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(500), nullable=True)
    content = Column(Text, nullable=True)
    author_id = Column(GUID, ForeignKey("users.id"), nullable=True, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    author = relationship("User")
    # Autoincrement id is the append order
    replies = relationship(
        "ForumReply",
        back_populates="thread",
        order_by="ForumReply.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<ForumThread {self.title}>"


class ForumReply(Base):
    """Reply appended to a thread; each reply is its own row"""
    __tablename__ = "forum_replies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    thread_id = Column(GUID, ForeignKey("forum_threads.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=True)
    author_id = Column(GUID, ForeignKey("users.id"), nullable=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)

    thread = relationship("ForumThread", back_populates="replies")
    author = relationship("User")
