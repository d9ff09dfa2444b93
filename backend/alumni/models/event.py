from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from alumni.core.database import Base
from alumni.core.types import GUID, generate_uuid


class Event(Base):
    """Alumni event"""
    __tablename__ = "events"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    date = Column(DateTime, nullable=True, index=True)
    location = Column(String(255), nullable=True)
    creator_id = Column(GUID, ForeignKey("users.id"), nullable=True, index=True)

    creator = relationship("User")

    def __repr__(self):
        return f"<Event {self.title}>"
