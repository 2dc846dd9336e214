"""Teacher directory backed by the ``teachers`` collection."""

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..errors import NotFound
from ..models import TeacherProfile, TeachingAssignment
from ..utils import as_object_id, to_trimmed_str


class TeacherDirectory:
    """Read-only lookups of teachers and their teaching assignments."""

    TEACHERS = "teachers"

    # Never read credentials out of the collection
    PROJECTION = {"password": 0}

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.teachers_col = db[self.TEACHERS]

    async def get_teacher(self, teacher_id: str) -> Optional[TeacherProfile]:
        """Find a teacher by ObjectId string. Invalid ids resolve to None."""
        oid = as_object_id(teacher_id)
        if oid is None:
            return None

        doc = await self.teachers_col.find_one({"_id": oid}, self.PROJECTION)
        return TeacherProfile.model_validate(doc) if doc else None

    async def get_teacher_by_email(self, email: str) -> Optional[TeacherProfile]:
        email = to_trimmed_str(email).lower()
        if not email:
            return None

        doc = await self.teachers_col.find_one({"email": email}, self.PROJECTION)
        return TeacherProfile.model_validate(doc) if doc else None

    async def get_teacher_assignments(self, teacher_id: str) -> List[TeachingAssignment]:
        teacher = await self.get_teacher(teacher_id)
        if teacher is None:
            raise NotFound("Teacher not found")
        return teacher.assignments
