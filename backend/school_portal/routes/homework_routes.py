"""
Homework routes.

Endpoints:
- POST /api/homework
- GET /api/homework
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pymongo.errors import ConnectionFailure

from ..errors import SchoolPortalError
from ..models import Homework, HomeworkCreate
from ..services import HomeworkService

logger = logging.getLogger(__name__)


def create_homework_routes(homework: HomeworkService) -> APIRouter:

    router = APIRouter(prefix="/api/homework", tags=["homework"])

    @router.post("", response_model=Homework, status_code=201)
    async def assign_homework(payload: HomeworkCreate):
        """Assign homework to a class the teacher teaches."""
        try:
            return await homework.assign_homework(payload)
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error assigning homework: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error assigning homework")

    @router.get("", response_model=List[Homework])
    async def list_homework(teacher_id: Optional[str] = Query(None, alias="teacherId")):
        try:
            return await homework.list_homework(teacher_id)
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching homework: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching homework")

    return router
