# app/repositories/activity.py
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models import Activity

logger = logging.getLogger(__name__)


class ActivityRepository:
    """
    Repository class for the activity feed
    """

    def _filters(self, user_id: int, type: Optional[str], search: Optional[str]) -> list:
        conditions = [Activity.user_id == user_id]
        if type and type != "all":
            conditions.append(Activity.type == type)
        if search:
            # % and _ in the search text match literally
            conditions.append(Activity.description.icontains(search, autoescape=True))
        return conditions

    async def create(self, db: AsyncSession, user_id: int, type: str, description: str) -> Activity:
        try:
            activity = Activity(user_id=user_id, type=type, description=description)
            db.add(activity)
            await db.commit()
            await db.refresh(activity)
            logger.info(f"Activity logged for user {user_id}: [{type}] {description}")
            return activity

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error logging activity for user {user_id}: {e}")
            raise

    async def get_page(
        self,
        db: AsyncSession,
        user_id: int,
        skip: int = 0,
        limit: int = 10,
        type: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Activity], int]:
        """
        One page of a user's activities (newest first) and the total matching count.
        """
        conditions = self._filters(user_id, type, search)

        result = await db.execute(
            select(Activity)
            .where(*conditions)
            .order_by(Activity.created_at.desc(), Activity.activity_id.desc())
            .offset(skip)
            .limit(limit)
        )
        activities = list(result.scalars().all())

        count_result = await db.execute(
            select(func.count()).select_from(Activity).where(*conditions)
        )
        return activities, count_result.scalar() or 0

    async def delete_matching(
        self, db: AsyncSession, user_id: int, type: Optional[str] = None, search: Optional[str] = None
    ) -> int:
        return await self._delete(db, user_id, self._filters(user_id, type, search))

    async def delete_by_ids(self, db: AsyncSession, user_id: int, ids: Sequence[int]) -> int:
        conditions = [Activity.user_id == user_id, Activity.activity_id.in_(ids)]
        return await self._delete(db, user_id, conditions)

    async def _delete(self, db: AsyncSession, user_id: int, conditions: list) -> int:
        try:
            result = await db.execute(
                delete(Activity).where(*conditions).execution_options(synchronize_session=False)
            )
            await db.commit()
            deleted = result.rowcount or 0
            logger.info(f"{deleted} activities deleted for user {user_id}")
            return deleted

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error deleting activities for user {user_id}: {e}")
            raise
