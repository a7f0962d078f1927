# routers/telegram.py
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas import ErrorResponse
from app.schemas.telegram import (TelegramActionResponse,
                                  TelegramInitializeRequest,
                                  TelegramSendRequest, TelegramSendResponse,
                                  TelegramStatusResponse)
from app.services.activity import ActivityService
from app.services.telegram_service import (TelegramBotError, TelegramService,
                                           get_telegram_service)
from app.utils.dependencies import get_activity_service, get_current_user
from app.utils.router import get_router

router = get_router("telegram")


def _send_error(message: str, failed: list, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    body = TelegramSendResponse(error=message, success=[], failed=failed)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/initialize",
    response_model=TelegramActionResponse,
    summary="Start the Telegram bot",
    responses={400: {"model": ErrorResponse, "description": "Token missing or rejected"}},
)
async def initialize_bot(
    data: TelegramInitializeRequest,
    telegram: Annotated[TelegramService, Depends(get_telegram_service)],
    activities: Annotated[ActivityService, Depends(get_activity_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    if not data.token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bot token'ı gereklidir")

    try:
        await telegram.initialize(data.token)
    except TelegramBotError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Bot başlatılırken bir hata oluştu: {e}",
        )

    await UserRepository().update(db, current_user, {"telegram_token": data.token})
    await activities.log(db, current_user.user_id, "telegram", "Telegram botu başlatıldı")
    return TelegramActionResponse(success=True, message="Telegram botu başlatıldı")


@router.post("/stop", response_model=TelegramActionResponse, summary="Stop the Telegram bot")
async def stop_bot(
    telegram: Annotated[TelegramService, Depends(get_telegram_service)],
    activities: Annotated[ActivityService, Depends(get_activity_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    await telegram.stop()
    await activities.log(db, current_user.user_id, "telegram", "Telegram botu durduruldu")
    return TelegramActionResponse(success=True, message="Telegram botu durduruldu")


@router.get("/status", response_model=TelegramStatusResponse, summary="Telegram bot status")
async def bot_status(
    telegram: Annotated[TelegramService, Depends(get_telegram_service)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return TelegramStatusResponse(running=telegram.is_running, bot_username=telegram.bot_username)


@router.post(
    "/send-message",
    response_model=TelegramSendResponse,
    summary="Message clients over Telegram",
    responses={400: {"model": TelegramSendResponse}},
)
async def send_message(
    data: TelegramSendRequest,
    telegram: Annotated[TelegramService, Depends(get_telegram_service)],
    activities: Annotated[ActivityService, Depends(get_activity_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Clients that never linked a chat (or are not yours) are reported in **failed**.
    """
    if not data.client_ids:
        return _send_error("Geçersiz istek: Danışan listesi eksik veya boş", [])
    if not data.message:
        return _send_error("Geçersiz istek: Mesaj içeriği eksik", [])
    if not current_user.telegram_token or not telegram.is_running:
        return _send_error(
            "Telegram bot henüz yapılandırılmamış. Lütfen önce bot token'ı girin.", data.client_ids
        )

    await activities.log(
        db, current_user.user_id, "telegram",
        f"{len(data.client_ids)} danışana Telegram mesajı gönderildi",
    )
    result = await telegram.send_message_to_clients(
        db, data.client_ids, data.message, current_user.user_id
    )
    return TelegramSendResponse(**result)
