# utils/dependencies.py
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.activity import ActivityService
from app.services.appointment import AppointmentService
from app.services.auth_service import AuthService
from app.services.client import ClientService
from app.services.dashboard import DashboardService
from app.services.diet_plan import DietPlanService
from app.services.measurement import MeasurementService
from app.utils.security import decode_token

# auto_error=False so a missing header is a 401 like an invalid token
auth_scheme = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_session)) -> AuthService:
    return AuthService(db)


def get_client_service() -> ClientService:
    return ClientService()


def get_measurement_service() -> MeasurementService:
    return MeasurementService()


def get_diet_plan_service() -> DietPlanService:
    return DietPlanService()


def get_appointment_service() -> AppointmentService:
    return AppointmentService()


def get_activity_service() -> ActivityService:
    return ActivityService()


def get_dashboard_service() -> DashboardService:
    return DashboardService()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(auth_scheme),
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolves the Bearer access token to the logged-in user
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Yetkilendirme hatası: Token bulunamadı",
        )

    payload = decode_token(credentials.credentials)
    if not payload or payload.get("scope") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Yetkilendirme hatası: Geçersiz token",
        )

    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub.isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Yetkilendirme hatası: Geçersiz token",
        )

    user = await UserRepository().get_by_id(db, int(sub))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Kullanıcı bulunamadı")

    return user
