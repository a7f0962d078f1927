# app/services/activity.py
import logging
import math

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.activity import ActivityRepository
from app.schemas.activity import (ActivityDeleteRequest,
                                  ActivityDeleteResponse,
                                  ActivityPageResponse, ActivityResponse)

logger = logging.getLogger(__name__)


class ActivityService:
    """
    Dashboard activity feed: recording, paging and clean-up
    """

    def __init__(self):
        self.activity_repo = ActivityRepository()

    async def log(self, db: AsyncSession, user_id: int, type: str, description: str) -> None:
        await self.activity_repo.create(db, user_id=user_id, type=type, description=description)

    async def get_activities(
        self,
        db: AsyncSession,
        user_id: int,
        page: int = 1,
        limit: int = 10,
        type: str | None = None,
        search: str | None = None,
    ) -> ActivityPageResponse:
        activities, total_count = await self.activity_repo.get_page(
            db, user_id, skip=(page - 1) * limit, limit=limit, type=type, search=search
        )
        return ActivityPageResponse(
            activities=[ActivityResponse.model_validate(a) for a in activities],
            total_count=total_count,
            total_pages=math.ceil(total_count / limit),
            current_page=page,
        )

    async def delete_activities(
        self, db: AsyncSession, user_id: int, request: ActivityDeleteRequest
    ) -> ActivityDeleteResponse:
        """
        delete_all removes everything matching type/search; otherwise the listed ids.
        """
        if request.delete_all:
            deleted = await self.activity_repo.delete_matching(
                db, user_id, type=request.type, search=request.search
            )
        elif request.ids:
            deleted = await self.activity_repo.delete_by_ids(db, user_id, request.ids)
        else:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Silinecek aktiviteler belirtilmedi.",
            )

        return ActivityDeleteResponse(success=True, message=f"{deleted} aktivite başarıyla silindi.")
