from app.repositories.activity import ActivityRepository
from app.repositories.appointment import AppointmentRepository
from app.repositories.client import ClientRepository
from app.repositories.diet_plan import DietPlanRepository
from app.repositories.measurement import MeasurementRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "AppointmentRepository",
    "ClientRepository",
    "DietPlanRepository",
    "MeasurementRepository",
    "UserRepository",
]
