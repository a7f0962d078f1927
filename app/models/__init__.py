"""
Data models

SQLModel table definitions.
"""
from app.models.activity import Activity
from app.models.appointment import Appointment
from app.models.client import Client
from app.models.diet_plan import DietPlan
from app.models.measurement import Measurement
from app.models.user import User

__all__ = ["User", "Client", "Measurement", "DietPlan", "Appointment", "Activity"]
