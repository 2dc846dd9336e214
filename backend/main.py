"""
School Portal Backend - Main FastAPI Application

Teaching assignments, bulk marks submission, mark approval, homework, feedback and
dashboard statistics over MongoDB.
Version: 1.0
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from school_portal import __version__
from school_portal.config.settings import settings
from school_portal.errors import register_exception_handlers
from school_portal.routes import (
    create_dashboard_routes,
    create_feedback_routes,
    create_homework_routes,
    create_marks_routes,
    create_teacher_routes
)
from school_portal.services import (
    DashboardService,
    FeedbackService,
    HomeworkService,
    MarkApprovalService,
    MarkSubmissionService
)
from school_portal.store import (
    KEY_FIELDS,
    FeedbackStore,
    HomeworkStore,
    MarkStore,
    StudentDirectory,
    TeacherDirectory
)

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def create_indexes(db: AsyncIOMotorDatabase):
    """Create database indexes."""
    try:
        # Marks: one record per student per class/section/subject
        await db.marks.create_index(
            [(field, 1) for field in KEY_FIELDS],
            unique=True
        )
        await db.marks.create_index("teacherId")
        await db.marks.create_index("status")

        # Teachers
        await db.teachers.create_index("email", unique=True)

        # Homework
        await db.homeworks.create_index("teacherId")

        # Feedback
        await db.feedbacks.create_index("teacherId")
        await db.feedbacks.create_index("studentId")
        await db.feedbacks.create_index("parentId")

    except Exception as e:
        logger.warning(f"Index creation warning: {e}")
        # Don't fail startup if indexes already exist


def create_app(db: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """
    Build the application.

    When ``db`` is given it is used as-is and no Mongo client is opened;
    otherwise a Motor client is created from settings.
    """
    client: Optional[AsyncIOMotorClient] = None
    if db is None:
        client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            maxPoolSize=settings.MONGO_MAX_POOL_SIZE,
            serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS
        )
        db = client[settings.DATABASE_NAME]

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """FastAPI lifespan context manager for startup/shutdown."""
        # STARTUP
        logger.info("🚀 School Portal Backend Starting Up...")

        try:
            settings.validate()
            logger.info("✅ Settings validated")

            if client is not None:
                await client.server_info()
                logger.info(f"✅ Connected to MongoDB: {settings.DATABASE_NAME}")

            await create_indexes(db)
            logger.info("✅ Database indexes created")

        except Exception as e:
            logger.error(f"❌ Startup failed: {e}")
            raise

        yield

        # SHUTDOWN
        logger.info("🛑 Shutting down...")
        if client is not None:
            client.close()
            logger.info("✅ Database connection closed")

    app = FastAPI(
        title="School Portal API",
        description="Teaching assignments, marks and homework",
        version=__version__,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Stores and services share the one database handle
    teachers = TeacherDirectory(db)
    marks = MarkStore(db)
    homework = HomeworkStore(db)
    students = StudentDirectory(db)
    feedback = FeedbackStore(db)

    app.include_router(create_teacher_routes(teachers, MarkSubmissionService(teachers, marks)))
    app.include_router(create_marks_routes(MarkApprovalService(marks)))
    app.include_router(create_homework_routes(HomeworkService(teachers, homework)))
    app.include_router(create_feedback_routes(FeedbackService(teachers, students, feedback)))
    app.include_router(create_dashboard_routes(DashboardService(db)))

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "database": settings.DATABASE_NAME
        }

    @app.get("/")
    async def root():
        return {
            "app": "School Portal",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/health"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
