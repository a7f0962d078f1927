# routers/auth.py
from typing import Annotated

from fastapi import Depends, status

from app.models.user import User
from app.schemas import (AuthResponse, ErrorResponse, LoginRequest,
                         MessageResponse, PasswordChangeRequest,
                         ProfileUpdateRequest, RegisterRequest, UserResponse)
from app.services.auth_service import AuthService
from app.utils.dependencies import get_auth_service, get_current_user
from app.utils.router import get_router

router = get_router("auth")


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Creates a dietitian account and returns it with an access token.",
    responses={
        400: {"model": ErrorResponse, "description": "E-mail already in use or invalid data"},
    },
)
async def register(
    data: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    - **name**: at least 2 characters
    - **email**: valid e-mail address
    - **password**: at least 6 characters
    """
    return await service.register(data)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    responses={401: {"model": ErrorResponse, "description": "Wrong e-mail or password"}},
)
async def login(
    data: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    return await service.login(email=data.email, password=data.password)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    responses={401: {"model": ErrorResponse}},
)
async def me(current_user: Annotated[User, Depends(get_current_user)]):
    return current_user


@router.put(
    "/profile",
    response_model=UserResponse,
    summary="Update profile",
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def update_profile(
    data: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    return await service.update_profile(current_user, data)


@router.put(
    "/password",
    response_model=MessageResponse,
    summary="Change password",
    responses={401: {"model": ErrorResponse, "description": "Current password is wrong"}},
)
async def change_password(
    data: PasswordChangeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
):
    await service.change_password(current_user, data)
    return MessageResponse(message="Şifre başarıyla değiştirildi")
