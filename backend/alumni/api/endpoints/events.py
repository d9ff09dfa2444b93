from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List

from alumni.core.database import get_db
from alumni.models.event import Event
from alumni.modules.auth.dependencies import get_current_identity
from alumni.schemas.auth import Identity
from alumni.schemas.community import EventCreate, EventResponse

router = APIRouter()


@router.get("", response_model=List[EventResponse])
async def list_events(db: AsyncSession = Depends(get_db)):
    """All events, newest event date first"""
    result = await db.execute(
        select(Event)
        .options(selectinload(Event.creator))
        .order_by(Event.date.desc().nulls_last())
    )
    return result.scalars().all()


@router.post("", response_model=EventResponse)
async def create_event(
    event_data: EventCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    event = Event(**event_data.model_dump(), creator_id=identity.id)
    db.add(event)
    await db.commit()

    result = await db.execute(
        select(Event)
        .options(selectinload(Event.creator))
        .where(Event.id == event.id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()
