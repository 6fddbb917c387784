# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error taxonomy for the API. Every error a handler can return is
# one of these classes; the handlers at the bottom render them as JSON.
#
# Response shape: {"error": "<human message>", "code": "<MACHINE_CODE>"}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


class ApplyTrackException(Exception):
    """
    Base exception for the ApplyTrack API.

    All custom exceptions inherit from this class and carry the HTTP status
    they map to.
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLYTRACK_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Client Errors
# =============================================================================

class InputValidationError(ApplyTrackException):
    """Raised when a request body is missing fields or has the wrong shape."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"fields": fields} if fields else None,
        )


class AuthError(ApplyTrackException):
    """
    Raised when the caller cannot be authenticated.

    `bearer_challenge` is set for rejected bearer credentials; only those
    responses carry `WWW-Authenticate: Bearer`.
    """

    def __init__(
        self,
        message: str = "Invalid or expired token.",
        code: str = "UNAUTHORIZED",
        bearer_challenge: bool = False,
    ):
        super().__init__(message=message, code=code, status_code=401)
        self.bearer_challenge = bearer_challenge


class ForbiddenError(ApplyTrackException):
    """Raised when the caller is known but not allowed in (disabled account)."""

    def __init__(self, message: str, code: str = "FORBIDDEN"):
        super().__init__(message=message, code=code, status_code=403)


class NotFoundError(ApplyTrackException):
    """Raised when a looked-up resource does not exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code, status_code=404)


class ConflictError(ApplyTrackException):
    """Raised when creating an identity that already exists."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message=message, code=code, status_code=409)


class ProviderError(ApplyTrackException):
    """
    Failure reported by the identity provider or the database.

    Recognized provider failures carry a 4xx status; everything else is a
    500 whose message is safe to show to the caller.
    """

    def __init__(
        self,
        message: str = INTERNAL_ERROR_MESSAGE,
        code: str = "PROVIDER_ERROR",
        status_code: int = 500,
    ):
        super().__init__(message=message, code=code, status_code=status_code)


# =============================================================================
# Exception Handlers
# =============================================================================

async def applytrack_exception_handler(
    request: Request,
    exc: ApplyTrackException
) -> JSONResponse:
    """Convert ApplyTrackException to JSON response."""
    challenge = isinstance(exc, AuthError) and exc.bearer_challenge
    headers = {"WWW-Authenticate": "Bearer"} if challenge else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


def _field_name(loc: tuple) -> str | None:
    """Pick the body field name out of a pydantic error location."""
    parts = [part for part in loc if isinstance(part, str) and part != "body"]
    return parts[0] if parts else None


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation errors.

    FastAPI reports these as 422 by default; this API answers 400 with a
    message naming the offending fields.
    """
    fields: list[str] = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            continue
        name = _field_name(tuple(error.get("loc", ())))
        if name and name not in fields:
            fields.append(name)

    if not fields:
        message = "Request body must be a JSON object."
    elif len(fields) == 1:
        message = f"{fields[0]} is required."
    elif len(fields) == 2:
        message = f"{fields[0]} and {fields[1]} are required."
    else:
        message = f"{', '.join(fields[:-1])}, and {fields[-1]} are required."

    return await applytrack_exception_handler(
        request, InputValidationError(message, fields=fields)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and return a generic 500."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR_MESSAGE, "code": "INTERNAL_ERROR"},
    )
