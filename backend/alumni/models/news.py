from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from alumni.core.database import Base
from alumni.core.types import GUID, generate_uuid


class News(Base):
    """News item posted by an administrator"""
    __tablename__ = "news"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(500), nullable=True)
    content = Column(Text, nullable=True)
    author_id = Column(GUID, ForeignKey("users.id"), nullable=True, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    author = relationship("User")

    def __repr__(self):
        return f"<News {self.title}>"
