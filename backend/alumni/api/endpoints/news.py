from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List

from alumni.core.database import get_db
from alumni.models.news import News
from alumni.modules.auth.dependencies import get_current_admin
from alumni.schemas.auth import Identity
from alumni.schemas.community import NewsCreate, NewsResponse

router = APIRouter()


@router.get("", response_model=List[NewsResponse])
async def list_news(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(News)
        .options(selectinload(News.author))
        .order_by(News.date.desc())
    )
    return result.scalars().all()


@router.post("", response_model=NewsResponse)
async def create_news(
    news_data: NewsCreate,
    admin: Identity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Publish a news item (admin only)"""
    news_item = News(**news_data.model_dump(), author_id=admin.id)
    db.add(news_item)
    await db.commit()

    result = await db.execute(
        select(News)
        .options(selectinload(News.author))
        .where(News.id == news_item.id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()
