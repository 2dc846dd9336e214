"""
Teacher routes.

Endpoints:
- GET /api/teacher/assignments
- POST /api/teacher/marks
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response
from pymongo.errors import ConnectionFailure

from ..errors import InvalidRequest, NotFound, SchoolPortalError
from ..models import BulkMarksRequest, BulkMarksResult, TeachingAssignment
from ..services import MarkSubmissionService
from ..store import TeacherDirectory

logger = logging.getLogger(__name__)


def create_teacher_routes(
    teachers: TeacherDirectory,
    submissions: MarkSubmissionService
) -> APIRouter:
    """Create teacher routes around the given collaborators."""

    router = APIRouter(prefix="/api/teacher", tags=["teacher"])

    @router.get("/assignments", response_model=List[TeachingAssignment])
    async def get_assignments(
        teacher_id: Optional[str] = Query(None, alias="teacherId"),
        teacher_email: Optional[str] = Query(None, alias="teacherEmail")
    ):
        """List the (class, section, subject) triples a teacher may grade."""
        try:
            if teacher_id:
                teacher = await teachers.get_teacher(teacher_id)
            elif teacher_email:
                teacher = await teachers.get_teacher_by_email(teacher_email)
            else:
                raise InvalidRequest("teacherId or teacherEmail is required")

            if teacher is None:
                raise NotFound("Teacher not found")

            return teacher.assignments

        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching assignments: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching assignments")

    @router.post("/marks", response_model=BulkMarksResult)
    async def submit_marks(payload: BulkMarksRequest, response: Response):
        """
        Submit marks for one class, section and subject.

        Every saved record goes back to Pending for admin review.
        Returns 201 when at least one record was created.
        """
        try:
            result = await submissions.submit_bulk_marks(
                teacher_id=payload.teacher_id,
                class_name=payload.class_name,
                section=payload.section,
                subject=payload.subject,
                entries=payload.entries
            )
            response.status_code = 201 if result.created_count > 0 else 200
            return result

        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error submitting marks: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error submitting marks")

    return router
