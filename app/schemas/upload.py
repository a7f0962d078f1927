from typing import Optional

from pydantic import BaseModel


class UploadedFile(BaseModel):
    url: str
    public_id: str
    format: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    resource_type: Optional[str] = None
    bytes: Optional[int] = None


class UploadResponse(BaseModel):
    url: str
    public_id: str
    success: bool = True
