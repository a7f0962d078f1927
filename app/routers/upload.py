# routers/upload.py
from typing import Annotated, Optional

from fastapi import Depends, File, Form, UploadFile, status

from app.core.config import settings
from app.models.user import User
from app.schemas import ErrorResponse
from app.schemas.upload import UploadResponse
from app.services.upload_service import UploadService, get_upload_service
from app.utils.dependencies import get_current_user
from app.utils.router import get_router

router = get_router("upload")


@router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload image",
    responses={
        400: {"model": ErrorResponse, "description": "No file in the form data"},
        413: {"model": ErrorResponse, "description": "File too large"},
        500: {"model": ErrorResponse, "description": "Cloudinary error"},
    },
)
async def upload_file(
    service: Annotated[UploadService, Depends(get_upload_service)],
    current_user: Annotated[User, Depends(get_current_user)],
    file: Annotated[Optional[UploadFile], File()] = None,
    folder: Annotated[Optional[str], Form()] = None,
):
    """
    multipart/form-data with **file** and an optional **folder** (default dietcim)
    """
    # one byte past the limit is enough to reject an oversized file
    content = await file.read(settings.UPLOAD_MAX_BYTES + 1) if file is not None else b""
    uploaded = await service.upload_file(
        content, filename=file.filename if file is not None else None, folder=folder
    )
    return UploadResponse(url=uploaded.url, public_id=uploaded.public_id, success=True)
