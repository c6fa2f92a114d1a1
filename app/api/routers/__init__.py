"""
app/api/routers package marker.
"""

from app.api.routers.dashboard import router as dashboard_router
from app.api.routers.expenses import router as expenses_router

__all__ = [
    "dashboard_router",
    "expenses_router",
]
