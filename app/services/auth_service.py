# services/auth_service.py
import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user_schema import (AuthResponse, PasswordChangeRequest,
                                     ProfileUpdateRequest, RegisterRequest,
                                     UserResponse)
from app.utils.security import create_access_token, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration, login and account maintenance for dietitians
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository()

    def _auth_response(self, user: User) -> AuthResponse:
        token = create_access_token(user_id=user.user_id, email=user.email)
        return AuthResponse(user=UserResponse.model_validate(user), token=token)

    async def register(self, data: RegisterRequest) -> AuthResponse:
        user = await self.user_repo.create(self.db, data.model_dump())
        if not user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Bu e-posta adresi zaten kullanılıyor",
            )

        logger.info(f"User registered: {user.email}")
        return self._auth_response(user)

    async def login(self, email: str, password: str) -> AuthResponse:
        user = await self.user_repo.get_by_email(self.db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: {email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Geçersiz e-posta veya şifre",
            )

        logger.info(f"User login success: {user.email}")
        return self._auth_response(user)

    async def update_profile(self, user: User, data: ProfileUpdateRequest) -> UserResponse:
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Güncellenecek veri bulunamadı",
            )

        new_email = update_data.get("email")
        if new_email and new_email != user.email:
            if await self.user_repo.exists_by_email(self.db, new_email):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Bu e-posta adresi zaten kullanılıyor",
                )

        updated = await self.user_repo.update(self.db, user, update_data)
        if not updated:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Kullanıcı güncellenirken bir hata oluştu",
            )
        return UserResponse.model_validate(updated)

    async def change_password(self, user: User, data: PasswordChangeRequest) -> None:
        if not verify_password(data.current_password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Mevcut şifre hatalı",
            )

        updated = await self.user_repo.update(self.db, user, {"password": data.new_password})
        if not updated:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Şifre değiştirilirken bir hata oluştu",
            )
        logger.info(f"Password changed for user {user.user_id}")
