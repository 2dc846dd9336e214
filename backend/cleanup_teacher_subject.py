"""
One-off maintenance script for the School Portal database.

Removes the legacy top-level ``subject`` field from teacher documents; the
subjects a teacher grades now live only in ``teaching[]``.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from school_portal.config.settings import settings

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger('cleanup_teacher_subject')


async def cleanup_teacher_subject(db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Unset ``subject`` on every teacher.

    Returns:
        {"modified": n, "remaining": m, "sample": {...} | None}
    """
    result = await db.teachers.update_many({}, {"$unset": {"subject": ""}})
    logger.info(f"✓ Updated {result.modified_count} teacher documents")

    remaining = await db.teachers.count_documents({"subject": {"$exists": True}})
    logger.info(f"✓ Remaining documents with subject field: {remaining}")

    sample = await db.teachers.find_one({}, {"password": 0})
    if sample:
        logger.info("✓ Sample teacher document (cleaned):")
        logger.info(json.dumps(sample, indent=2, default=str))

    if remaining == 0:
        logger.info("✅ Cleanup successful! All legacy subject fields removed.")
    else:
        logger.warning(f"⚠️  {remaining} documents still have subject field")

    return {"modified": result.modified_count, "remaining": remaining, "sample": sample}


async def main() -> int:
    """Entry point"""
    client = AsyncIOMotorClient(
        settings.MONGODB_URL,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS
    )
    try:
        await client.server_info()
        logger.info(f"✓ Connected to MongoDB: {settings.DATABASE_NAME}")
        await cleanup_teacher_subject(client[settings.DATABASE_NAME])
        return 0
    except Exception as e:
        logger.error(f"❌ Error during cleanup: {e}", exc_info=True)
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
