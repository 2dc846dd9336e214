"""
Configuration settings for the School Portal backend.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(ROOT_DIR / '.env')


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment."""

    # Database
    MONGODB_URL: str = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
    DATABASE_NAME: str = os.environ.get("DATABASE_NAME", "BANUSchool")
    MONGO_MAX_POOL_SIZE: int = int(os.environ.get("MONGO_MAX_POOL_SIZE", 50))
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = int(os.environ.get("MONGO_SERVER_SELECTION_TIMEOUT_MS", 5000))

    # Server
    PORT: int = int(os.environ.get("PORT", 3000))
    HOST: str = os.environ.get("HOST", "0.0.0.0")
    DEBUG: bool = _env_bool("DEBUG", "false")
    CORS_ORIGINS: List[str] = [
        o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    # Marks
    MARKS_MIN: float = 0
    MARKS_MAX: float = 100
    CREATED_TOLERANCE_SECONDS: float = float(os.environ.get("CREATED_TOLERANCE_SECONDS", 1.0))
    UPSERT_CONCURRENCY: int = int(os.environ.get("UPSERT_CONCURRENCY", 8))

    # Logging
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    def validate(self):
        """Validate critical settings."""
        if not self.MONGODB_URL:
            raise ValueError("MONGODB_URI environment variable not set")
        if self.UPSERT_CONCURRENCY < 1:
            raise ValueError("UPSERT_CONCURRENCY must be at least 1")
        if self.CREATED_TOLERANCE_SECONDS < 0:
            raise ValueError("CREATED_TOLERANCE_SECONDS must not be negative")
        return True


# Global settings instance
settings = Settings()
