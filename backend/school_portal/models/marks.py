"""Mark-related Pydantic models"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import Field, field_validator

from .base import CamelModel, object_id_to_str


class MarkStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class MarkEntry(CamelModel):
    """
    One row of a bulk submission.

    Fields are accepted as sent and coerced by the service, so one malformed
    row becomes a per-entry error instead of rejecting the whole batch.
    """
    roll_no: Any = None
    student_name: Any = None
    marks: Any = None


class MarkRecord(CamelModel):
    """Stored score for one student in one subject"""
    id: Optional[str] = Field(default=None, alias="_id")
    roll_no: str
    student_name: str = ""
    class_name: str
    section: str
    subject: str
    marks: Union[int, float]
    teacher_id: Optional[str] = None
    teacher_email: str = ""
    status: MarkStatus = MarkStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", "teacher_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return object_id_to_str(value)


class EntryError(CamelModel):
    """A per-entry problem reported back alongside saved records"""
    roll_no: str = ""
    student_name: str = ""
    code: str
    error: str


class BulkMarksRequest(CamelModel):
    teacher_id: str
    class_name: str
    section: str
    subject: str
    entries: List[MarkEntry] = []


class BulkMarksResult(CamelModel):
    success: bool = True
    message: str = ""
    saved_count: int = 0
    created_count: int = 0
    updated_count: int = 0
    saved: List[MarkRecord] = []
    errors: List[EntryError] = []


class MarkStatusUpdate(CamelModel):
    status: Optional[str] = None
