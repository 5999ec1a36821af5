"""
Error responses for the storefront API

Every error the frontend sees has the shape `{"error": "<message>"}`.
Messages that look like they come from the database driver or a stack trace
are replaced before they leave the process; the original is logged.
"""
import logging
import traceback
from typing import Union

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.core.exceptions import StorefrontError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An internal error occurred. Please try again later."
MAX_MESSAGE_LENGTH = 200

# Lower-case fragments that mark a message as internal
SENSITIVE_PATTERNS = (
    "sqlalchemy",
    "asyncpg",
    "postgresql",
    "psycopg",
    "relation \"",
    "violates",
    "password",
    "secret",
    "traceback",
    "file \"",
    "/app/",
)


def is_sensitive_error(message: str) -> bool:
    lowered = message.lower()
    return any(pattern in lowered for pattern in SENSITIVE_PATTERNS)


def sanitize_error_message(error: Union[str, Exception]) -> str:
    """Client-safe version of an error message (unchanged when DEBUG is on)."""
    message = error if isinstance(error, str) else str(error)

    if settings.DEBUG:
        return message
    if is_sensitive_error(message):
        return GENERIC_ERROR
    if len(message) > MAX_MESSAGE_LENGTH:
        return message[:MAX_MESSAGE_LENGTH] + "..."
    return message


def error_response(error: StorefrontError) -> JSONResponse:
    """Render a StorefrontError with its HTTP status."""
    if error.status_code >= 500:
        logger.error(f"{error!r} details={error.details}")
    return JSONResponse(
        status_code=error.status_code,
        content={"error": sanitize_error_message(error.message)},
    )


class ErrorSanitizationMiddleware(BaseHTTPMiddleware):
    """
    Last-resort handler for exceptions no route caught.

    Logs the traceback and answers 500. The exception text is only returned
    when DEBUG is on.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(
                f"Unhandled {type(e).__name__} on {request.method} {request.url.path}: {e}\n"
                f"{traceback.format_exc()}"
            )
            content = {"error": GENERIC_ERROR}
            if settings.DEBUG:
                content["detail"] = f"{type(e).__name__}: {e}"
            return JSONResponse(status_code=500, content=content)
