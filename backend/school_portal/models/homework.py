"""Homework Pydantic models"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, object_id_to_str


class HomeworkCreate(CamelModel):
    teacher_id: str
    class_name: str
    section: str
    subject: str
    title: str
    description: str
    due_date: datetime


class Homework(CamelModel):
    id: Optional[str] = Field(default=None, alias="_id")
    teacher_id: Optional[str] = None
    teacher_email: str = ""
    class_name: str
    section: str
    subject: str
    title: str
    description: str
    due_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", "teacher_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return object_id_to_str(value)
