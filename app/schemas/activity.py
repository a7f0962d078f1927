from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    activity_id: int
    user_id: int
    type: str
    description: str
    created_at: Optional[datetime] = None


class ActivityPageResponse(BaseModel):
    activities: List[ActivityResponse]
    total_count: int
    total_pages: int
    current_page: int


class ActivityDeleteRequest(BaseModel):
    ids: Optional[List[int]] = None
    delete_all: bool = False
    type: Optional[str] = Field(default=None, description="'all' disables the filter")
    search: Optional[str] = None


class ActivityDeleteResponse(BaseModel):
    success: bool
    message: str
