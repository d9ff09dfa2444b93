"""
Admin User Management endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from alumni.core.database import get_db
from alumni.core.exceptions import UserNotFoundError, EmailDeliveryError, ServerError
from alumni.core.logging_config import logger
from alumni.models import User
from alumni.modules.auth.dependencies import get_current_admin
from alumni.schemas.auth import Identity
from alumni.schemas.user import UserResponse, UserApprovalUpdate
from alumni.services.email_service import EmailService, get_email_service

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """List all users (pending and approved)"""
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return result.scalars().all()


@router.put("/{user_id}", response_model=UserResponse)
async def update_user_approval(
    user_id: str,
    update_data: UserApprovalUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin),
    email_service: EmailService = Depends(get_email_service),
):
    """
    Approve or un-approve a user.

    The approval is committed before the notification email goes out; if the
    email fails the caller gets a 500 but the user stays approved.
    """
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise UserNotFoundError(user_id)

    was_approved = user.is_approved
    user.is_approved = update_data.is_approved
    await db.commit()

    logger.info(
        f"Admin {current_admin.id} set isApproved={user.is_approved} for {user.email}",
        extra={"event_type": "admin_approval", "target_user": user.id},
    )

    if user.is_approved and not was_approved:
        try:
            await email_service.send_approval_email(user.email, user.name)
        except EmailDeliveryError as e:
            logger.log_error_with_context(e, context="approval_email", target_user=user.id)
            raise ServerError() from e

    return user
