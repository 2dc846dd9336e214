"""Pydantic models for the School Portal backend"""

from .base import CamelModel
from .teacher import TeachingAssignment, TeacherProfile
from .marks import (
    MarkStatus,
    MarkEntry,
    MarkRecord,
    EntryError,
    BulkMarksRequest,
    BulkMarksResult,
    MarkStatusUpdate
)
from .homework import Homework, HomeworkCreate
from .feedback import Feedback, FeedbackCreate, StudentProfile
from .dashboard import DashboardStats

__all__ = [
    "CamelModel",

    # Teacher models
    "TeachingAssignment",
    "TeacherProfile",

    # Mark models
    "MarkStatus",
    "MarkEntry",
    "MarkRecord",
    "EntryError",
    "BulkMarksRequest",
    "BulkMarksResult",
    "MarkStatusUpdate",

    # Homework models
    "Homework",
    "HomeworkCreate",

    # Feedback models
    "StudentProfile",
    "Feedback",
    "FeedbackCreate",

    # Dashboard models
    "DashboardStats",
]
