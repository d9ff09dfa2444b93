from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from alumni.schemas.base import CamelModel
from alumni.schemas.user import UserRef


class CreatePaymentRequest(BaseModel):
    amount: Optional[float] = None
    currency: Optional[str] = "NGN"


class CreatePaymentResponse(BaseModel):
    authorization_url: str


class VerifyPaymentResponse(BaseModel):
    success: bool
    message: str


class DonationResponse(CamelModel):
    id: str
    amount: float
    currency: str
    reference: str
    donor_id: Optional[str] = None
    donor: Optional[UserRef] = None
    date: datetime
