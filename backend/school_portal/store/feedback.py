"""Feedback store backed by the ``feedbacks`` collection."""

from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..models import Feedback
from ..utils import utcnow


class FeedbackStore:
    """One feedback document per teacher, student and class (plus section/subject when given)."""

    FEEDBACK = "feedbacks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.feedback_col = db[self.FEEDBACK]

    async def upsert_feedback(
        self,
        key: Dict[str, Any],
        fields: Dict[str, Any]
    ) -> Tuple[Feedback, bool]:
        """Create or overwrite the feedback identified by ``key``; returns (feedback, created)."""
        now = utcnow()
        result = await self.feedback_col.update_one(
            key,
            {
                "$set": {**fields, "updatedAt": now},
                "$setOnInsert": {"createdAt": now}
            },
            upsert=True
        )

        doc = await self.feedback_col.find_one(key)
        return Feedback.model_validate(doc), result.upserted_id is not None

    async def find_feedback(self, query: Optional[Dict[str, Any]] = None) -> List[Feedback]:
        cursor = self.feedback_col.find(query or {}).sort("createdAt", -1)
        docs = await cursor.to_list(length=None)
        return [Feedback.model_validate(doc) for doc in docs]

    async def delete_feedback(self, feedback_id: ObjectId) -> bool:
        result = await self.feedback_col.delete_one({"_id": feedback_id})
        return result.deleted_count > 0
