from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from alumni.core.database import get_db
from alumni.core.exceptions import MissingFieldError, InvalidFileTypeError
from alumni.core.logging_config import logger
from alumni.models.board_minute import BoardMinute
from alumni.modules.auth.dependencies import get_current_identity, get_current_admin
from alumni.schemas.auth import Identity
from alumni.schemas.community import BoardMinuteResponse
from alumni.services.storage_service import StorageService, get_storage_service, is_pdf, PDF_CONTENT_TYPES

router = APIRouter()


@router.get("", response_model=List[BoardMinuteResponse])
async def list_board_minutes(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(BoardMinute).order_by(BoardMinute.date.desc()))
    return result.scalars().all()


@router.post("", response_model=BoardMinuteResponse)
async def upload_board_minute(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    admin: Identity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
):
    """Upload board minutes as a PDF (admin only)"""
    if file is None or not file.filename:
        raise MissingFieldError("PDF file is required", field="file")
    if not title or not title.strip():
        raise MissingFieldError("Title is required", field="title")
    if not is_pdf(file.filename, file.content_type):
        raise InvalidFileTypeError(file.content_type or "unknown", PDF_CONTENT_TYPES)

    data = await file.read()
    file_url = await storage.upload(data, kind="board-minutes", filename=file.filename, content_type="application/pdf")

    minute = BoardMinute(title=title.strip(), file_url=file_url)
    db.add(minute)
    await db.commit()

    logger.info(f"Board minute '{minute.title}' uploaded by {admin.id}")
    return minute
