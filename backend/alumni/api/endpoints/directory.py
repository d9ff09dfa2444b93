from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional

from alumni.core.database import get_db
from alumni.models.user import User
from alumni.modules.auth.dependencies import get_current_identity
from alumni.schemas.auth import Identity
from alumni.schemas.user import DirectoryUserResponse

router = APIRouter()


@router.get("", response_model=List[DirectoryUserResponse])
async def list_directory(
    year: Optional[int] = Query(None, description="Exact graduation year"),
    location: Optional[str] = Query(None, description="Case-insensitive substring of location"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Approved alumni, optionally filtered by year and location"""
    query = select(User).where(User.is_approved.is_(True))

    if year is not None:
        query = query.where(User.graduation_year == year)
    if location:
        query = query.where(func.lower(User.location).contains(location.lower(), autoescape=True))

    query = query.order_by(User.name)
    result = await db.execute(query)
    return result.scalars().all()
