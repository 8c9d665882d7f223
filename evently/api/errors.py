"""API error taxonomy and exception handlers.

Route handlers raise ``APIError`` with an ``ErrorKind``; the handlers
registered here turn every failure into a JSON body of the form
``{"error": <message>, "kind": <kind>}``. Database and unexpected errors are
logged with their traceback and reported to the client without details.
"""

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..db import DatabaseError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

class ErrorKind(str, Enum):
    """Stable error discriminant sent to clients next to the message."""
    VALIDATION_ERROR = 'validation_error'
    UNAUTHORIZED = 'unauthorized'
    FORBIDDEN = 'forbidden'
    NOT_FOUND = 'not_found'
    CONFLICT = 'conflict'
    INTERNAL_ERROR = 'internal_error'

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

_STATUS_CODES = {
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL_ERROR: 500,
}

_KINDS_BY_STATUS = {status: kind for kind, status in _STATUS_CODES.items()}

class APIError(Exception):
    """An error that maps directly onto an HTTP response."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=kind.status_code,
        content={"error": message, "kind": kind.value},
    )

def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message

def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on the application."""

    @app.exception_handler(APIError)
    async def handle_api_error(request: Request, exc: APIError):
        return error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return error_response(ErrorKind.VALIDATION_ERROR, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        kind = _KINDS_BY_STATUS.get(exc.status_code)
        if kind is None:
            return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})
        return error_response(kind, str(exc.detail))

    @app.exception_handler(DatabaseError)
    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: Exception):
        logger.error(f"Database error while handling {request.method} {request.url.path}", exc_info=exc)
        return error_response(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error while handling {request.method} {request.url.path}", exc_info=exc)
        return error_response(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)
