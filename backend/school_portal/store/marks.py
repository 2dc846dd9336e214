"""Mark record store backed by the ``marks`` collection."""

from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from ..models import MarkRecord
from ..utils import utcnow

# Fields that identify one mark record
KEY_FIELDS = ("rollNo", "className", "section", "subject")


class MarkStore:
    """Keyed upserts and filtered reads of mark records."""

    MARKS = "marks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.marks_col = db[self.MARKS]

    async def upsert_mark_record(
        self,
        key: Dict[str, str],
        fields: Dict[str, Any]
    ) -> Tuple[MarkRecord, Optional[bool]]:
        """
        Create or replace the record identified by ``key``.

        Args:
            key: {"rollNo", "className", "section", "subject"}
            fields: values to overwrite on every write

        Returns:
            (record, created) where ``created`` comes from the driver's
            upserted id.
        """
        now = utcnow()
        result = await self.marks_col.update_one(
            key,
            {
                "$set": {**fields, "updatedAt": now},
                "$setOnInsert": {"createdAt": now}
            },
            upsert=True
        )
        created = result.upserted_id is not None

        doc = await self.marks_col.find_one(key)
        return MarkRecord.model_validate(doc), created

    async def find_marks(self, query: Optional[Dict[str, Any]] = None) -> List[MarkRecord]:
        """Records matching ``query``, newest first."""
        cursor = self.marks_col.find(query or {}).sort("createdAt", -1)
        docs = await cursor.to_list(length=None)
        return [MarkRecord.model_validate(doc) for doc in docs]

    async def get_mark(self, mark_id: ObjectId) -> Optional[MarkRecord]:
        doc = await self.marks_col.find_one({"_id": mark_id})
        return MarkRecord.model_validate(doc) if doc else None

    async def set_status(self, mark_id: ObjectId, status: str) -> Optional[MarkRecord]:
        """Approval-workflow transition; None when the record is absent."""
        doc = await self.marks_col.find_one_and_update(
            {"_id": mark_id},
            {"$set": {"status": status, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return MarkRecord.model_validate(doc) if doc else None
