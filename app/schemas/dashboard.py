from pydantic import BaseModel, Field


class DashboardStatsResponse(BaseModel):
    active_clients: int
    today_appointments: int
    active_diet_plans: int
    telegram_linked_clients: int = Field(description="Clients that linked a Telegram chat")
    weight_goal_achieved: int
    diet_compliance: int
    exercise_compliance: int
    water_intake_tracking: int
