"""
API error taxonomy and the application-wide exception handlers.

Every error leaves the service as JSON:
- ``{"error": message, "details": ...}`` for APIError and unexpected failures
- ``{"errors": [{"path": ..., "message": ...}]}`` for request validation

``details`` is dropped from all bodies in production.
"""

import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of field paths
_LOCATION_ROOTS = {"body", "path", "query", "header", "cookie"}


class APIError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class Unauthorized(APIError):
    """
    Authentication failed.

    The message is always the same so callers cannot tell a missing token
    from a malformed, expired or forged one.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"

    def __init__(self):
        super().__init__()


class InvalidCredentials(APIError):
    """Login failed: unknown email or wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class NotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InternalError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal Server Error"


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Convert pydantic error dicts into ``{path, message}`` entries, in order."""
    formatted = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        formatted.append({
            "path": ".".join(str(part) for part in loc),
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


def error_body(message: str, details: Any = None, production: bool = False) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if details is not None and not production:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI, production: bool = False) -> None:
    """Attach the JSON error handlers to the application."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.details, production),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": format_validation_errors(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=getattr(exc, "status_code", status.HTTP_500_INTERNAL_SERVER_ERROR),
            content=error_body(
                str(exc) or "Internal Server Error",
                "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
                production,
            ),
        )
