from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from alumni.core.database import Base
from alumni.core.types import GUID, generate_uuid


class Gallery(Base):
    """Uploaded gallery image"""
    __tablename__ = "gallery"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    url = Column(Text, nullable=False)
    caption = Column(String(1000), nullable=True)
    uploader_id = Column(GUID, ForeignKey("users.id"), nullable=True, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    uploader = relationship("User")
