"""
Router module

Defines the HTTP endpoints. Each router receives the request, resolves the
logged-in user and hands the work to a service.
"""

from .activities import router as activities_router
from .appointments import router as appointments_router
from .auth import router as auth_router
from .clients import router as clients_router
from .dashboard import router as dashboard_router
from .diet_plans import router as diet_plans_router
from .measurements import router as measurements_router
from .telegram import router as telegram_router
from .upload import router as upload_router

__all__ = [
    "activities_router",
    "appointments_router",
    "auth_router",
    "clients_router",
    "dashboard_router",
    "diet_plans_router",
    "measurements_router",
    "telegram_router",
    "upload_router",
]
