from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from alumni.core.database import get_db
from alumni.core.exceptions import UserNotFoundError, InvalidFileTypeError
from alumni.core.logging_config import logger
from alumni.models.user import User
from alumni.modules.auth.dependencies import get_current_identity
from alumni.schemas.auth import Identity
from alumni.schemas.user import UserResponse
from alumni.services.storage_service import StorageService, get_storage_service, is_image
from alumni.utils.validators import validate_graduation_year

router = APIRouter()


async def _get_user(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise UserNotFoundError(user_id)
    return user


@router.get("", response_model=UserResponse)
async def get_profile(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Own user record"""
    return await _get_user(db, identity.id)


@router.put("", response_model=UserResponse)
async def update_profile(
    name: Optional[str] = Form(None),
    graduation_year: Optional[int] = Form(None, alias="graduationYear"),
    bio: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    profile_pic: Optional[UploadFile] = File(None, alias="profilePic"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
):
    """
    Update own profile (multipart form).

    Only the fields present in the form change. A profilePic file is
    uploaded first and its URL stored.
    """
    user = await _get_user(db, identity.id)

    if graduation_year is not None:
        validate_graduation_year(graduation_year)

    if profile_pic is not None and profile_pic.filename:
        if not is_image(profile_pic.content_type):
            raise InvalidFileTypeError(profile_pic.content_type or "unknown", ["image/*"])
        data = await profile_pic.read()
        user.profile_pic = await storage.upload(
            data,
            kind="profiles",
            filename=profile_pic.filename,
            content_type=profile_pic.content_type,
        )

    if name is not None:
        user.name = name
    if graduation_year is not None:
        user.graduation_year = graduation_year
    if bio is not None:
        user.bio = bio
    if location is not None:
        user.location = location

    await db.commit()
    logger.info(f"Profile updated for user {user.id}")
    return user
