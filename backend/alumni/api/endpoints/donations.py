"""
DONATIONS (PAYSTACK)
====================
1. /donations/create-payment → Paystack initialize → hosted checkout URL
2. Donor pays, Paystack redirects to the callback URL with the reference
3. /donations/verify/{reference} → Paystack verify → Donation row

Nothing is stored at step 1. A reference produces at most one Donation,
however many times it is verified.
"""

import math

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from typing import List

from alumni.core.config import settings
from alumni.core.database import get_db
from alumni.core.exceptions import InvalidAmountError, PaymentGatewayError
from alumni.core.logging_config import logger
from alumni.models.donation import Donation
from alumni.modules.auth.dependencies import get_current_identity, get_current_admin
from alumni.schemas.auth import Identity
from alumni.schemas.donation import (
    CreatePaymentRequest,
    CreatePaymentResponse,
    VerifyPaymentResponse,
    DonationResponse,
)
from alumni.services.payment_service import (
    PaystackGateway,
    get_payment_gateway,
    normalize_currency,
    to_minor_units,
    from_minor_units,
    generate_reference,
)

SUCCESS_MESSAGE = "Donation successful!"

router = APIRouter()


@router.post("/create-payment", response_model=CreatePaymentResponse)
async def create_payment(
    payment: CreatePaymentRequest,
    identity: Identity = Depends(get_current_identity),
    gateway: PaystackGateway = Depends(get_payment_gateway),
):
    """Start a Paystack checkout for a donation"""
    if payment.amount is None or not math.isfinite(payment.amount) or payment.amount < 1:
        raise InvalidAmountError()

    currency = normalize_currency(payment.currency)
    reference = generate_reference()
    amount_minor = to_minor_units(payment.amount)

    if not gateway.is_configured:
        logger.warning("[Paystack] PAYSTACK_SECRET_KEY is not set, initialize will be rejected")

    try:
        authorization_url = await gateway.initialize_transaction(
            amount=amount_minor,
            email=identity.email or settings.DEFAULT_DONOR_EMAIL,
            currency=currency,
            reference=reference,
            callback_url=settings.PAYSTACK_CALLBACK_URL,
            metadata={"userId": identity.id, "currency": currency},
        )
    except PaymentGatewayError as e:
        logger.log_payment_event(
            "initialize", reference, success=False, amount=payment.amount,
            gateway_message=e.details.get("gateway_message"),
        )
        raise

    logger.log_payment_event(
        "initialize",
        reference,
        success=True,
        amount=payment.amount,
        currency=currency,
        donor_id=identity.id,
    )
    return CreatePaymentResponse(authorization_url=authorization_url)


@router.get("/verify/{reference}", response_model=VerifyPaymentResponse)
async def verify_payment(
    reference: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    gateway: PaystackGateway = Depends(get_payment_gateway),
):
    """Confirm a payment with Paystack and record the donation once"""
    try:
        data = await gateway.verify_transaction(reference)
    except PaymentGatewayError as e:
        logger.log_payment_event(
            "verify", reference, success=False,
            gateway_message=e.details.get("gateway_message"),
        )
        raise

    if data.get("status") != "success":
        logger.log_payment_event("verify", reference, success=False, gateway_status=data.get("status"))
        return JSONResponse(
            status_code=400,
            content={"success": False, "msg": "Payment verification failed"},
        )

    existing = await db.execute(select(Donation.id).where(Donation.reference == reference))
    if existing.scalar_one_or_none() is not None:
        logger.info(f"[Paystack] Reference {reference} already recorded, skipping insert")
        return VerifyPaymentResponse(success=True, message=SUCCESS_MESSAGE)

    amount = from_minor_units(data.get("amount") or 0)
    donation = Donation(
        amount=amount,
        currency=normalize_currency(data.get("currency")),
        reference=reference,
        donor_id=identity.id,
    )
    db.add(donation)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent verify of the same reference won the insert
        await db.rollback()
        logger.info(f"[Paystack] Reference {reference} recorded concurrently")
        return VerifyPaymentResponse(success=True, message=SUCCESS_MESSAGE)

    logger.log_payment_event("verify", reference, success=True, amount=amount, donor_id=identity.id)
    return VerifyPaymentResponse(success=True, message=SUCCESS_MESSAGE)


@router.get("", response_model=List[DonationResponse])
async def list_donations(
    admin: Identity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """All donations, newest first (admin only)"""
    result = await db.execute(
        select(Donation)
        .options(selectinload(Donation.donor))
        .order_by(Donation.date.desc())
    )
    return result.scalars().all()
