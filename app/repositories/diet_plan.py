# app/repositories/diet_plan.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models import DietPlan

logger = logging.getLogger(__name__)


class DietPlanRepository:
    """
    Repository class for diet plan database access
    """

    async def create(
        self, db: AsyncSession, data: Dict[str, Any], client_id: int, created_by: int
    ) -> DietPlan:
        try:
            diet_plan = DietPlan(**data, client_id=client_id, created_by=created_by)
            db.add(diet_plan)
            await db.commit()
            await db.refresh(diet_plan)
            logger.info(f"Diet plan created for client {client_id}: {diet_plan.diet_plan_id}")
            return diet_plan

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating diet plan for client {client_id}: {e}")
            raise

    async def get_by_id(self, db: AsyncSession, diet_plan_id: int) -> Optional[DietPlan]:
        result = await db.execute(select(DietPlan).where(DietPlan.diet_plan_id == diet_plan_id))
        return result.scalars().first()

    async def get_all_by_creator(self, db: AsyncSession, user_id: int) -> List[DietPlan]:
        result = await db.execute(
            select(DietPlan)
            .where(DietPlan.created_by == user_id)
            .order_by(DietPlan.created_at.desc(), DietPlan.diet_plan_id.desc())
        )
        return list(result.scalars().all())

    async def get_all_by_client_id(self, db: AsyncSession, client_id: int) -> List[DietPlan]:
        result = await db.execute(
            select(DietPlan)
            .where(DietPlan.client_id == client_id)
            .order_by(DietPlan.start_date.desc(), DietPlan.diet_plan_id.desc())
        )
        return list(result.scalars().all())

    async def get_active_by_client_id(self, db: AsyncSession, client_id: int) -> Optional[DietPlan]:
        """
        Most recently started plan with status "active".
        """
        result = await db.execute(
            select(DietPlan)
            .where(DietPlan.client_id == client_id)
            .where(DietPlan.status == "active")
            .order_by(DietPlan.start_date.desc(), DietPlan.diet_plan_id.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def count_active_by_creator(self, db: AsyncSession, user_id: int) -> int:
        result = await db.execute(
            select(func.count())
            .select_from(DietPlan)
            .where(DietPlan.created_by == user_id)
            .where(DietPlan.status == "active")
        )
        return result.scalar() or 0

    async def update(self, db: AsyncSession, diet_plan: DietPlan, update_data: Dict[str, Any]) -> DietPlan:
        diet_plan_id = diet_plan.diet_plan_id
        try:
            for key, value in update_data.items():
                setattr(diet_plan, key, value)

            db.add(diet_plan)
            await db.commit()
            await db.refresh(diet_plan)
            logger.info(f"Diet plan updated: {diet_plan_id}")
            return diet_plan

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error updating diet plan {diet_plan_id}: {e}")
            raise

    async def delete(self, db: AsyncSession, diet_plan: DietPlan) -> bool:
        diet_plan_id = diet_plan.diet_plan_id
        try:
            await db.delete(diet_plan)
            await db.commit()
            logger.info(f"Diet plan deleted: {diet_plan_id}")
            return True

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error deleting diet plan {diet_plan_id}: {e}")
            return False
