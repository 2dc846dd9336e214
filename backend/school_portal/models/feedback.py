"""Student and feedback Pydantic models"""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import CamelModel, object_id_to_str


class StudentProfile(CamelModel):
    """The part of a student document feedback needs"""
    id: str = Field(alias="_id")
    name: str = ""
    roll_no: str = ""
    class_name: str = ""
    section: str = ""
    parent_email: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return object_id_to_str(value)

    @field_validator("name", "roll_no", "class_name", "section", "parent_email", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else str(value)


class FeedbackCreate(CamelModel):
    """
    Feedback submitted by a teacher for one student.

    Values are taken as sent and cleaned by ``FeedbackService``. The class
    may arrive as ``className`` or ``class``.
    """
    teacher_id: Any = None
    student_id: Any = None
    parent_id: Any = None
    class_name: Any = Field(default=None, validation_alias=AliasChoices("className", "class", "class_name"))
    section: Any = None
    subject: Any = None
    feedback: Any = None
    visible_to_parent: Optional[bool] = None
    visible_to_student: Optional[bool] = None


class Feedback(CamelModel):
    id: Optional[str] = Field(default=None, alias="_id")
    teacher_id: Optional[str] = None
    student_id: Optional[str] = None
    parent_id: Optional[str] = None
    class_name: str = Field(default="", validation_alias=AliasChoices("className", "class", "class_name"))
    section: Optional[str] = None
    subject: Optional[str] = None
    feedback: str = ""
    visible_to_parent: bool = True
    visible_to_student: bool = True
    # Filled in from the student record on teacher listings
    student_name: Optional[str] = None
    roll_no: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", "teacher_id", "student_id", "parent_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return object_id_to_str(value)
