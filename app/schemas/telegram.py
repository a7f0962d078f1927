from typing import List, Optional

from pydantic import BaseModel, Field


class TelegramInitializeRequest(BaseModel):
    token: Optional[str] = Field(default=None, description="Bot token from @BotFather")


class TelegramSendRequest(BaseModel):
    client_ids: Optional[List[int]] = None
    message: Optional[str] = None


class TelegramSendResponse(BaseModel):
    success: List[int] = Field(default_factory=list)
    failed: List[int] = Field(default_factory=list)
    error: Optional[str] = None


class TelegramStatusResponse(BaseModel):
    running: bool
    bot_username: Optional[str] = None


class TelegramActionResponse(BaseModel):
    success: bool
    message: str


class ReferenceCodeResponse(BaseModel):
    success: bool
    reference_code: str
    bot_name: str
