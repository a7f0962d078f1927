# routers/dashboard.py
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.schemas.dashboard import DashboardStatsResponse
from app.services.dashboard import DashboardService
from app.utils.dependencies import get_current_user, get_dashboard_service
from app.utils.router import get_router

router = get_router("dashboard")


@router.get("/stats", response_model=DashboardStatsResponse, summary="Dashboard statistics")
async def get_stats(
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_stats(db, current_user.user_id)
