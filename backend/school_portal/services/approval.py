"""
Mark approval workflow - admins review submitted marks and move them from
Pending to Approved or Rejected. Any later resubmission by the teacher puts a
record back to Pending (see ``MarkSubmissionService``).
"""

import logging
from typing import List, Optional

from ..errors import InvalidRequest, NotFound
from ..models import MarkRecord, MarkStatus
from ..utils import as_object_id, to_trimmed_str

logger = logging.getLogger(__name__)

REVIEW_STATUSES = (MarkStatus.APPROVED.value, MarkStatus.REJECTED.value)
ALL_STATUSES = tuple(s.value for s in MarkStatus)


class MarkApprovalService:

    def __init__(self, marks):
        self.marks = marks

    async def list_all(self) -> List[MarkRecord]:
        return await self.marks.find_marks()

    async def list_marks(self, teacher_id: Optional[str] = None) -> List[MarkRecord]:
        """All marks, or only those submitted by one teacher."""
        if not to_trimmed_str(teacher_id):
            return await self.marks.find_marks()

        teacher_oid = as_object_id(teacher_id)
        if teacher_oid is None:
            raise InvalidRequest("Invalid teacher ID")
        return await self.marks.find_marks({"teacherId": teacher_oid})

    async def filter_by_status(self, status: Optional[str] = None) -> List[MarkRecord]:
        status = to_trimmed_str(status)
        if not status:
            return await self.marks.find_marks()
        if status not in ALL_STATUSES:
            raise InvalidRequest("Status must be 'Pending', 'Approved', or 'Rejected'")
        return await self.marks.find_marks({"status": status})

    async def update_status(self, mark_id: str, status: Optional[str]) -> MarkRecord:
        """
        Approve or reject a mark record.

        Raises:
            InvalidRequest: status is not Approved/Rejected, or the id is malformed
            NotFound: no record with this id
        """
        status = to_trimmed_str(status)
        if status not in REVIEW_STATUSES:
            raise InvalidRequest("Status must be 'Approved' or 'Rejected'")

        oid = as_object_id(mark_id)
        if oid is None:
            raise InvalidRequest("Invalid mark ID")

        record = await self.marks.set_status(oid, status)
        if record is None:
            raise NotFound("Mark not found")

        logger.info(f"Mark {mark_id} ({record.roll_no}/{record.subject}) set to {status}")
        return record
