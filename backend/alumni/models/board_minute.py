from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime

from alumni.core.database import Base
from alumni.core.types import GUID, generate_uuid


class BoardMinute(Base):
    """Board meeting minutes (PDF)"""
    __tablename__ = "board_minutes"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(500), nullable=False)
    file_url = Column(Text, nullable=False)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
