"""
Dashboard routes.

Endpoints:
- GET /api/dashboard/stats
"""

import logging

from fastapi import APIRouter, HTTPException
from pymongo.errors import ConnectionFailure

from ..services import DashboardService

logger = logging.getLogger(__name__)


def create_dashboard_routes(dashboard: DashboardService) -> APIRouter:

    router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

    @router.get("/stats")
    async def get_dashboard_stats():
        """Counts of teachers, students, parents and announcements."""
        try:
            stats = await dashboard.get_stats()
            return {"success": True, "data": stats}
        except ConnectionFailure:
            raise
        except Exception as e:
            logger.error(f"Error fetching dashboard stats: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching dashboard statistics")

    return router
