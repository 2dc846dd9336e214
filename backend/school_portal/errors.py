"""
Error taxonomy for the School Portal backend.

Fatal errors are raised as ``SchoolPortalError`` subclasses and turned into a
JSON envelope by the handlers registered in ``register_exception_handlers``.
Per-entry problems during bulk mark submission are not raised; they are
collected as ``EntryError`` models (see ``ENTRY_*`` codes below).
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import ConnectionFailure

logger = logging.getLogger(__name__)

# Per-entry error codes
ENTRY_MISSING_ROLL_NUMBER = "MissingRollNumber"
ENTRY_SCORE_OUT_OF_RANGE = "ScoreOutOfRange"
ENTRY_STORE_ERROR = "StoreError"


class SchoolPortalError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    code = "InternalError"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "code": self.code, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFound(SchoolPortalError):
    status_code = 404
    code = "NotFound"


class Forbidden(SchoolPortalError):
    status_code = 403
    code = "Forbidden"


class NoValidEntries(SchoolPortalError):
    status_code = 400
    code = "NoValidEntries"


class InvalidRequest(SchoolPortalError):
    status_code = 400
    code = "InvalidRequest"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers for domain and database errors."""

    @app.exception_handler(SchoolPortalError)
    async def _school_portal_error(request: Request, exc: SchoolPortalError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(ConnectionFailure)
    async def _database_unavailable(request: Request, exc: ConnectionFailure):
        logger.error(f"Database unavailable on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "Database connection unavailable",
                "error": str(exc),
            },
        )
