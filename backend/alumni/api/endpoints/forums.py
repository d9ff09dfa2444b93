from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List

from alumni.core.database import get_db
from alumni.core.exceptions import ThreadNotFoundError
from alumni.models.forum import ForumThread, ForumReply
from alumni.modules.auth.dependencies import get_current_identity
from alumni.schemas.auth import Identity
from alumni.schemas.community import ForumThreadCreate, ForumReplyCreate, ForumThreadResponse

router = APIRouter()


def _thread_query():
    """Thread with its author, replies and reply authors eagerly loaded"""
    return select(ForumThread).options(
        selectinload(ForumThread.author),
        selectinload(ForumThread.replies).selectinload(ForumReply.author),
    )


async def _load_thread(db: AsyncSession, thread_id: str) -> ForumThread:
    result = await db.execute(
        _thread_query()
        .where(ForumThread.id == thread_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.get("", response_model=List[ForumThreadResponse])
async def list_threads(db: AsyncSession = Depends(get_db)):
    result = await db.execute(_thread_query().order_by(ForumThread.date.desc()))
    return result.scalars().all()


@router.post("", response_model=ForumThreadResponse)
async def create_thread(
    thread_data: ForumThreadCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    thread = ForumThread(**thread_data.model_dump(), author_id=identity.id)
    db.add(thread)
    await db.commit()
    return await _load_thread(db, thread.id)


@router.post("/{thread_id}/reply", response_model=ForumThreadResponse)
async def reply_to_thread(
    thread_id: str,
    reply_data: ForumReplyCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """
    Append a reply to a thread.

    The reply is a single INSERT into forum_replies, so concurrent replies
    to the same thread never overwrite each other. Returns the whole thread.
    """
    result = await db.execute(select(ForumThread.id).where(ForumThread.id == thread_id))
    if result.scalar_one_or_none() is None:
        raise ThreadNotFoundError(thread_id)

    db.add(ForumReply(thread_id=thread_id, content=reply_data.content, author_id=identity.id))
    await db.commit()

    return await _load_thread(db, thread_id)
