"""
Service layer

Business rules between the routers and the repositories: ownership checks,
activity logging and the calculations built on top of stored data.
"""

from .activity import ActivityService
from .appointment import AppointmentService
from .auth_service import AuthService
from .client import ClientService
from .dashboard import DashboardService
from .diet_plan import DietPlanService
from .measurement import MeasurementService

__all__ = [
    "ActivityService",
    "AppointmentService",
    "AuthService",
    "ClientService",
    "DashboardService",
    "DietPlanService",
    "MeasurementService",
]
