"""Dashboard statistics - entity counts for the admin overview."""

import asyncio

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..models import DashboardStats


class DashboardService:

    COLLECTIONS = ("teachers", "students", "parents", "announcements")

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def get_stats(self) -> DashboardStats:
        counts = await asyncio.gather(
            *(self.db[name].count_documents({}) for name in self.COLLECTIONS)
        )
        return DashboardStats(**dict(zip(self.COLLECTIONS, counts)))
