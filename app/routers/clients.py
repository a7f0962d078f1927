# routers/clients.py
from typing import Annotated, List

from fastapi import Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.database import get_session
from app.models.user import User
from app.schemas import ErrorResponse
from app.schemas.client import (ClientCreateRequest, ClientResponse,
                                ClientSummaryResponse, ClientUpdateRequest)
from app.schemas.telegram import ReferenceCodeResponse
from app.services.client import ClientService
from app.utils.dependencies import get_client_service, get_current_user
from app.utils.router import get_router

router = get_router("clients")

NOT_FOUND_OR_FORBIDDEN = {
    403: {"model": ErrorResponse, "description": "Client belongs to another dietitian"},
    404: {"model": ErrorResponse, "description": "Client not found"},
}


@router.get("", response_model=List[ClientResponse], summary="List clients")
async def get_clients(
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """All clients of the logged-in dietitian, newest first."""
    return await service.get_clients(db, current_user.user_id)


@router.get("/active", response_model=List[ClientResponse], summary="List active clients")
async def get_active_clients(
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_clients(db, current_user.user_id, active_only=True)


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create client",
    responses={400: {"model": ErrorResponse, "description": "Invalid data"}},
)
async def create_client(
    data: ClientCreateRequest,
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    - **name**: at least 3 characters
    - **email**: valid e-mail address
    - **gender**: male | female
    - **status**: active | inactive (default active)
    """
    return await service.create_client(db, data, current_user.user_id)


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Get client",
    responses=NOT_FOUND_OR_FORBIDDEN,
)
async def get_client(
    client_id: int,
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_client(db, client_id, current_user.user_id)


@router.put(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update client",
    responses=NOT_FOUND_OR_FORBIDDEN,
)
async def update_client(
    client_id: int,
    data: ClientUpdateRequest,
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.update_client(db, client_id, data, current_user.user_id)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete client",
    description="Deletes the client with its measurements, diet plans and appointments.",
    responses=NOT_FOUND_OR_FORBIDDEN,
)
async def delete_client(
    client_id: int,
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    await service.delete_client(db, client_id, current_user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{client_id}/summary",
    response_model=ClientSummaryResponse,
    summary="Client body metrics",
    responses=NOT_FOUND_OR_FORBIDDEN,
)
async def get_client_summary(
    client_id: int,
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_summary(db, client_id, current_user.user_id)


@router.post(
    "/{client_id}/telegram-reference",
    response_model=ReferenceCodeResponse,
    summary="Create Telegram reference code",
    responses=NOT_FOUND_OR_FORBIDDEN,
)
async def create_telegram_reference(
    client_id: int,
    service: Annotated[ClientService, Depends(get_client_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """The client sends "/start <code>" to the bot to link their chat."""
    code = await service.generate_reference_code(db, client_id, current_user.user_id)
    bot_name = settings.TELEGRAM_BOT_NAME if current_user.telegram_token else "Henüz bot oluşturulmadı"
    return ReferenceCodeResponse(success=True, reference_code=code, bot_name=bot_name)
