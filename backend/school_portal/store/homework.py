"""Homework store backed by the ``homeworks`` collection."""

from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..models import Homework
from ..utils import utcnow


class HomeworkStore:

    HOMEWORKS = "homeworks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.homework_col = db[self.HOMEWORKS]

    async def insert_homework(self, doc: Dict[str, Any]) -> Homework:
        now = utcnow()
        doc = {**doc, "createdAt": now, "updatedAt": now}
        result = await self.homework_col.insert_one(doc)
        doc["_id"] = result.inserted_id
        return Homework.model_validate(doc)

    async def find_homework(self, teacher_id: Optional[ObjectId] = None) -> List[Homework]:
        query = {"teacherId": teacher_id} if teacher_id is not None else {}
        cursor = self.homework_col.find(query).sort("createdAt", -1)
        docs = await cursor.to_list(length=None)
        return [Homework.model_validate(doc) for doc in docs]
