"""
Feedback routes.

Endpoints:
- POST /api/feedback
- DELETE /api/feedback/{feedback_id}
- GET /api/feedback?teacherId=
- GET /api/feedback/teacher/{teacher_id}
- GET /api/feedback/student/{student_id}
- GET /api/feedback/parent/{parent_id}
- GET /api/feedback/class
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response
from pymongo.errors import ConnectionFailure

from ..errors import SchoolPortalError
from ..models import Feedback, FeedbackCreate
from ..services import FeedbackService

logger = logging.getLogger(__name__)


def create_feedback_routes(feedback: FeedbackService) -> APIRouter:
    """Create feedback routes."""

    router = APIRouter(prefix="/api/feedback", tags=["feedback"])

    @router.post("", response_model=Feedback)
    async def save_feedback(payload: FeedbackCreate, response: Response):
        """Create or overwrite a teacher's feedback for a student (201 when new)."""
        try:
            saved, created = await feedback.save_feedback(payload)
            response.status_code = 201 if created else 200
            return saved
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error saving feedback: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error saving feedback")

    @router.delete("/{feedback_id}")
    async def delete_feedback(feedback_id: str):
        try:
            await feedback.delete_feedback(feedback_id)
            return {"success": True, "message": "Feedback deleted"}
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error deleting feedback: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error deleting feedback")

    async def _teacher_feedback(teacher_id: Optional[str]) -> List[Feedback]:
        try:
            return await feedback.list_for_teacher(teacher_id)
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching teacher feedback: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching feedback")

    @router.get("", response_model=List[Feedback])
    async def list_teacher_feedback(teacher_id: Optional[str] = Query(None, alias="teacherId")):
        return await _teacher_feedback(teacher_id)

    @router.get("/teacher/{teacher_id}", response_model=List[Feedback])
    async def list_teacher_feedback_by_path(teacher_id: str):
        return await _teacher_feedback(teacher_id)

    @router.get("/student/{student_id}", response_model=List[Feedback])
    async def list_student_feedback(student_id: str):
        """Feedback visible to the student."""
        try:
            return await feedback.list_for_student(student_id)
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching student feedback: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching feedback")

    @router.get("/parent/{parent_id}", response_model=List[Feedback])
    async def list_parent_feedback(parent_id: str):
        """Feedback visible to the parent."""
        try:
            return await feedback.list_for_parent(parent_id)
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching parent feedback: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching feedback")

    @router.get("/class", response_model=List[Feedback])
    async def list_class_feedback(
        class_name: Optional[str] = Query(None, alias="className"),
        section: Optional[str] = None,
        subject: Optional[str] = None
    ):
        try:
            return await feedback.list_for_class(class_name, section, subject)
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching class feedback: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching feedback")

    return router
