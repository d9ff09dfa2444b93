"""
Storage Service - uploads files to S3-compatible object storage
and returns their public URL.
"""

import asyncio
import os
import uuid
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from alumni.core.config import settings
from alumni.core.exceptions import StorageError
from alumni.core.logging_config import logger


IMAGE_TYPE_PREFIXES = ("image/",)
MEDIA_TYPE_PREFIXES = ("image/", "video/")
PDF_CONTENT_TYPES = ["application/pdf"]


def guess_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    """File extension for the object key, from the filename or the content type"""
    if filename:
        ext = os.path.splitext(filename)[1].lower()
        if ext:
            return ext
    return {
        "image/jpeg": ".jpg",
        "image/png": ".png",
        "image/gif": ".gif",
        "image/webp": ".webp",
        "application/pdf": ".pdf",
    }.get(content_type or "", "")


def is_image(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.lower().startswith(IMAGE_TYPE_PREFIXES)


def is_media(content_type: Optional[str]) -> bool:
    """Images and videos, as accepted by the gallery"""
    return bool(content_type) and content_type.lower().startswith(MEDIA_TYPE_PREFIXES)


def is_pdf(filename: Optional[str], content_type: Optional[str]) -> bool:
    if content_type in PDF_CONTENT_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(".pdf")


class StorageService:
    """
    Upload sink backed by S3 (or any S3-compatible endpoint).

    Objects are stored under `<folder>/<kind>/<uuid><ext>`.
    """

    def __init__(self):
        self._client = None
        self._bucket_name = settings.S3_BUCKET_NAME
        self._folder = settings.STORAGE_FOLDER.strip("/")

    def _get_client(self):
        """Lazy initialization of the S3 client"""
        if self._client is None:
            client_kwargs = {
                "region_name": settings.AWS_REGION,
                "config": Config(
                    signature_version="s3v4",
                    connect_timeout=settings.STORAGE_TIMEOUT_SECONDS,
                    read_timeout=settings.STORAGE_TIMEOUT_SECONDS,
                    retries={"max_attempts": 1},
                ),
            }
            if settings.S3_ENDPOINT_URL:
                client_kwargs["endpoint_url"] = settings.S3_ENDPOINT_URL
            if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
                client_kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
                client_kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
            else:
                # Use IAM role credentials (automatic in ECS/EC2)
                logger.info("S3 client using IAM role credentials")

            self._client = boto3.client("s3", **client_kwargs)
        return self._client

    def build_key(self, kind: str, filename: Optional[str], content_type: Optional[str]) -> str:
        return f"{self._folder}/{kind}/{uuid.uuid4().hex}{guess_extension(filename, content_type)}"

    async def upload(
        self,
        data: bytes,
        kind: str,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Upload bytes and return the public URL.

        Raises StorageError on any storage failure.
        """
        if not settings.storage_configured:
            logger.error("[Storage] S3_BUCKET_NAME is not set, cannot upload")
            raise StorageError()

        key = self.build_key(kind, filename, content_type)
        put_kwargs = {
            "Bucket": self._bucket_name,
            "Key": key,
            "Body": data,
            "ContentType": content_type or "application/octet-stream",
        }

        try:
            # boto3 is blocking - run in a worker thread
            await asyncio.to_thread(self._get_client().put_object, **put_kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"[Storage] Upload of {key} failed: {e}")
            raise StorageError() from e

        logger.info(f"[Storage] Uploaded {key} ({len(data)} bytes)")
        return settings.public_url_for(key)


storage_service = StorageService()


def get_storage_service() -> StorageService:
    """FastAPI dependency"""
    return storage_service
