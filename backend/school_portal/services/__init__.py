"""Services for teaching assignments, marks, homework, feedback and the dashboard."""

from .matching import (
    AssignmentAuthorizer,
    find_matching_assignment,
    matches_assignment,
    normalize_alnum,
    normalize_loose
)
from .marks import MarkSubmissionService, classify_created
from .approval import MarkApprovalService
from .homework import HomeworkService
from .feedback import FeedbackService
from .dashboard import DashboardService

__all__ = [
    "AssignmentAuthorizer",
    "find_matching_assignment",
    "matches_assignment",
    "normalize_alnum",
    "normalize_loose",
    "MarkSubmissionService",
    "classify_created",
    "MarkApprovalService",
    "HomeworkService",
    "FeedbackService",
    "DashboardService"
]
