"""
Mark review routes.

Endpoints:
- GET /api/marks
- GET /api/marks/admin/all
- GET /api/marks/filter-by-status
- PUT /api/marks/{mark_id}/status
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pymongo.errors import ConnectionFailure

from ..errors import SchoolPortalError
from ..models import MarkRecord, MarkStatus, MarkStatusUpdate
from ..services import MarkApprovalService

logger = logging.getLogger(__name__)


def create_marks_routes(approvals: MarkApprovalService) -> APIRouter:
    """Create mark review routes."""

    router = APIRouter(prefix="/api/marks", tags=["marks"])

    @router.get("", response_model=List[MarkRecord])
    async def list_marks(teacher_id: Optional[str] = Query(None, alias="teacherId")):
        """All marks, or one teacher's submissions."""
        try:
            return await approvals.list_marks(teacher_id)
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching marks: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching marks")

    @router.get("/admin/all")
    async def get_all_marks_for_approval():
        """All marks for the admin approval screen, newest first."""
        try:
            marks = await approvals.list_all()
            return {"success": True, "data": marks, "total": len(marks)}
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching marks for approval: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching marks")

    @router.get("/filter-by-status")
    async def get_marks_by_status(status: Optional[str] = None):
        try:
            marks = await approvals.filter_by_status(status)
            return {"success": True, "data": marks, "total": len(marks)}
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error fetching marks by status: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching marks")

    @router.put("/{mark_id}/status")
    async def update_mark_status(mark_id: str, payload: MarkStatusUpdate):
        """Approve or reject a mark."""
        try:
            record = await approvals.update_status(mark_id, payload.status)
            verb = "approved" if record.status == MarkStatus.APPROVED else "rejected"
            return {
                "success": True,
                "message": f"Mark {verb} successfully",
                "data": record
            }
        except (SchoolPortalError, ConnectionFailure):
            raise
        except Exception as e:
            logger.error(f"Error updating mark status: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error updating mark status")

    return router
