"""API route factories. Each takes its services and returns an APIRouter."""

from .teacher_routes import create_teacher_routes
from .marks_routes import create_marks_routes
from .homework_routes import create_homework_routes
from .feedback_routes import create_feedback_routes
from .dashboard_routes import create_dashboard_routes

__all__ = [
    "create_teacher_routes",
    "create_marks_routes",
    "create_homework_routes",
    "create_feedback_routes",
    "create_dashboard_routes"
]
