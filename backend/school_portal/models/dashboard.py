"""Dashboard Pydantic models"""

from .base import CamelModel


class DashboardStats(CamelModel):
    """Entity counts shown on the admin dashboard"""
    teachers: int = 0
    students: int = 0
    parents: int = 0
    announcements: int = 0
