"""
Cloudinary file storage
The SDK is synchronous, so calls run in a worker thread.
"""
import asyncio
import io
import logging
from typing import Optional

import cloudinary
import cloudinary.uploader
from fastapi import HTTPException, status

from app.core.config import settings
from app.schemas.upload import UploadedFile

logger = logging.getLogger(__name__)


class UploadService:
    """
    Uploads images to Cloudinary and removes them again
    """

    def __init__(self):
        self._configured = False

    def _configure(self):
        if self._configured:
            return
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        self._configured = True

    @staticmethod
    def _to_uploaded_file(result: dict) -> UploadedFile:
        return UploadedFile(
            url=result["secure_url"],
            public_id=result["public_id"],
            format=result.get("format"),
            width=result.get("width"),
            height=result.get("height"),
            resource_type=result.get("resource_type"),
            bytes=result.get("bytes"),
        )

    async def upload_file(
        self, content: bytes, filename: Optional[str] = None, folder: Optional[str] = None
    ) -> UploadedFile:
        """
        Uploads raw file content.

        Raises:
            HTTPException(400): empty content
            HTTPException(413): content larger than UPLOAD_MAX_BYTES
            HTTPException(500): Cloudinary rejected the upload
        """
        if not content:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Dosya yüklenmedi veya form-data içinde file alanı bulunamadı",
            )
        if len(content) > settings.UPLOAD_MAX_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Dosya boyutu {settings.UPLOAD_MAX_BYTES // (1024 * 1024)} MB sınırını aşıyor",
            )

        self._configure()
        folder = folder or settings.UPLOAD_DEFAULT_FOLDER
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                folder=folder,
                resource_type="auto",
                filename_override=filename,
            )
        except Exception as e:
            logger.error(f"Cloudinary upload failed ({filename}): {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Cloudinary'ye yükleme hatası: {e}",
            )

        uploaded = self._to_uploaded_file(result)
        logger.info(f"File uploaded to {folder}: {uploaded.public_id} ({len(content)} bytes)")
        return uploaded

    async def upload_from_url(self, url: str, folder: Optional[str] = None) -> UploadedFile:
        """Lets Cloudinary fetch a remote image by URL."""
        self._configure()
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                url,
                folder=folder or settings.UPLOAD_DEFAULT_FOLDER,
            )
        except Exception as e:
            logger.error(f"Cloudinary upload from URL failed ({url}): {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Cloudinary'ye yükleme hatası: {e}",
            )
        return self._to_uploaded_file(result)

    async def delete_file(self, public_id: str) -> bool:
        self._configure()
        try:
            result = await asyncio.to_thread(cloudinary.uploader.destroy, public_id)
        except Exception as e:
            logger.error(f"Cloudinary delete failed ({public_id}): {e}")
            return False

        deleted = result.get("result") == "ok"
        if not deleted:
            logger.warning(f"Cloudinary did not delete {public_id}: {result}")
        return deleted


_upload_service: UploadService | None = None


def get_upload_service() -> UploadService:
    global _upload_service
    if _upload_service is None:
        _upload_service = UploadService()
    return _upload_service
