from sqlalchemy import Column, String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from alumni.core.database import Base
from alumni.core.types import GUID, generate_uuid


class Donation(Base):
    """Donation recorded after the payment gateway confirmed it"""
    __tablename__ = "donations"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)  # Major units
    currency = Column(String(3), default="NGN", nullable=False)
    reference = Column(String(100), unique=True, index=True, nullable=False)  # Gateway reference
    donor_id = Column(GUID, ForeignKey("users.id"), nullable=True, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    donor = relationship("User")

    def __repr__(self):
        return f"<Donation {self.reference} {self.amount} {self.currency}>"
