"""Student and parent lookups backed by the ``students`` and ``parents`` collections."""

from typing import Dict, Iterable, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..models import StudentProfile
from ..utils import to_trimmed_str


class StudentDirectory:

    STUDENTS = "students"
    PARENTS = "parents"

    PROJECTION = {"password": 0}

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.students_col = db[self.STUDENTS]
        self.parents_col = db[self.PARENTS]

    async def get_student(self, student_id: ObjectId) -> Optional[StudentProfile]:
        doc = await self.students_col.find_one({"_id": student_id}, self.PROJECTION)
        return StudentProfile.model_validate(doc) if doc else None

    async def find_students(self, student_ids: Iterable[ObjectId]) -> Dict[str, StudentProfile]:
        """Students keyed by id string; unknown ids are left out."""
        ids = list(student_ids)
        if not ids:
            return {}
        cursor = self.students_col.find({"_id": {"$in": ids}}, self.PROJECTION)
        docs = await cursor.to_list(length=None)
        students = [StudentProfile.model_validate(doc) for doc in docs]
        return {student.id: student for student in students}

    async def find_parent_id(self, email: str) -> Optional[ObjectId]:
        """Id of the parent registered under ``email``, if any."""
        email = to_trimmed_str(email).lower()
        if not email:
            return None
        doc = await self.parents_col.find_one({"email": email}, {"_id": 1})
        return doc["_id"] if doc else None
