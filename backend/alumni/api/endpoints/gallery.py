from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List, Optional

from alumni.core.database import get_db
from alumni.core.exceptions import MissingFieldError, InvalidFileTypeError
from alumni.models.gallery import Gallery
from alumni.modules.auth.dependencies import get_current_identity
from alumni.schemas.auth import Identity
from alumni.schemas.community import GalleryResponse
from alumni.services.storage_service import StorageService, get_storage_service, is_media

router = APIRouter()


@router.get("", response_model=List[GalleryResponse])
async def list_gallery(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Gallery)
        .options(selectinload(Gallery.uploader))
        .order_by(Gallery.date.desc())
    )
    return result.scalars().all()


@router.post("", response_model=GalleryResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    caption: Optional[str] = Form(None),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
):
    """Upload an image to the gallery (multipart: image, caption)"""
    if image is None or not image.filename:
        raise MissingFieldError("Image file is required", field="image")
    if not is_media(image.content_type):
        raise InvalidFileTypeError(image.content_type or "unknown", ["image/*", "video/*"])

    data = await image.read()
    url = await storage.upload(data, kind="gallery", filename=image.filename, content_type=image.content_type)

    item = Gallery(url=url, caption=caption, uploader_id=identity.id)
    db.add(item)
    await db.commit()

    result = await db.execute(
        select(Gallery)
        .options(selectinload(Gallery.uploader))
        .where(Gallery.id == item.id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()
