# app/services/diet_plan.py
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import DietPlan
from app.repositories.diet_plan import DietPlanRepository
from app.schemas.diet_plan import (DietPlanRequest, DietPlanResponse,
                                   DietPlanUpdateRequest, GeneratedDietPlan)
from app.services.activity import ActivityService
from app.services.client import ClientService
from app.services.diet_generator import DietPlanGenerator

logger = logging.getLogger(__name__)


class DietPlanService:
    """
    Diet plan business logic. A plan belongs to the dietitian in created_by.
    """

    def __init__(self, generator: Optional[DietPlanGenerator] = None):
        self.diet_plan_repo = DietPlanRepository()
        self.client_service = ClientService()
        self.activity_service = ActivityService()
        self.generator = generator or DietPlanGenerator()

    async def _get_owned_plan(
        self, db: AsyncSession, diet_plan_id: int, user_id: int, forbidden_detail: str
    ) -> DietPlan:
        diet_plan = await self.diet_plan_repo.get_by_id(db, diet_plan_id)
        if not diet_plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Diyet planı bulunamadı")
        if diet_plan.created_by != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=forbidden_detail)
        return diet_plan

    async def get_diet_plans(self, db: AsyncSession, user_id: int) -> List[DietPlanResponse]:
        plans = await self.diet_plan_repo.get_all_by_creator(db, user_id)
        return [DietPlanResponse.model_validate(p) for p in plans]

    async def get_client_diet_plans(
        self, db: AsyncSession, client_id: int, user_id: int
    ) -> List[DietPlanResponse]:
        await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışanın diyet planlarına erişim izniniz yok"
        )
        plans = await self.diet_plan_repo.get_all_by_client_id(db, client_id)
        return [DietPlanResponse.model_validate(p) for p in plans]

    async def get_active_diet_plan(self, db: AsyncSession, client_id: int, user_id: int) -> DietPlanResponse:
        await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışanın diyet planlarına erişim izniniz yok"
        )
        plan = await self.diet_plan_repo.get_active_by_client_id(db, client_id)
        if not plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aktif diyet planı bulunamadı")
        return DietPlanResponse.model_validate(plan)

    async def create_diet_plan(
        self,
        db: AsyncSession,
        data: DietPlanRequest,
        user_id: int,
        client_id: Optional[int] = None,
    ) -> DietPlanResponse:
        """
        client_id from the path wins over the one in the body.
        """
        client_id = client_id if client_id is not None else data.client_id
        if client_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Danışan ID'si gereklidir")

        client = await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışan için diyet planı oluşturma izniniz yok"
        )
        plan = await self.diet_plan_repo.create(
            db, data.model_dump(exclude={"client_id"}), client_id=client_id, created_by=user_id
        )
        await self.activity_service.log(
            db, user_id, "diet_plan",
            f'Yeni diyet planı oluşturuldu: {client.name} için "{plan.title}"',
        )
        return DietPlanResponse.model_validate(plan)

    async def generate_diet_plan(self, db: AsyncSession, client_id: int, user_id: int) -> GeneratedDietPlan:
        client = await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışan için diyet planı oluşturma izniniz yok"
        )
        return self.generator.generate(client)

    async def get_diet_plan(self, db: AsyncSession, diet_plan_id: int, user_id: int) -> DietPlanResponse:
        plan = await self._get_owned_plan(db, diet_plan_id, user_id, "Bu diyet planına erişim izniniz yok")
        return DietPlanResponse.model_validate(plan)

    async def update_diet_plan(
        self, db: AsyncSession, diet_plan_id: int, data: DietPlanUpdateRequest, user_id: int
    ) -> DietPlanResponse:
        plan = await self._get_owned_plan(db, diet_plan_id, user_id, "Bu diyet planını güncelleme izniniz yok")
        plan = await self.diet_plan_repo.update(db, plan, data.model_dump(exclude_unset=True))
        return DietPlanResponse.model_validate(plan)

    async def delete_diet_plan(self, db: AsyncSession, diet_plan_id: int, user_id: int) -> None:
        plan = await self._get_owned_plan(db, diet_plan_id, user_id, "Bu diyet planını silme izniniz yok")
        if not await self.diet_plan_repo.delete(db, plan):
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Diyet planı silinemedi",
            )
