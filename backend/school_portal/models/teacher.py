"""Teacher and teaching-assignment Pydantic models"""

from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import CamelModel, object_id_to_str


class TeachingAssignment(CamelModel):
    """A (class, section, subject) triple a teacher may grade.

    Teacher documents store the class under ``class``; the API exposes it as
    ``className``.
    """
    class_name: str = Field(default="", validation_alias=AliasChoices("className", "class", "class_name"))
    section: str = ""
    subject: str = ""

    @field_validator("class_name", "section", "subject", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else str(value)


class TeacherProfile(CamelModel):
    """The part of a teacher document the marks workflow needs"""
    id: str = Field(alias="_id")
    name: str = ""
    email: str = ""
    assignments: List[TeachingAssignment] = Field(
        default_factory=list,
        validation_alias=AliasChoices("teaching", "assignments"),
    )
    status: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return object_id_to_str(value)

    @field_validator("assignments", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value
