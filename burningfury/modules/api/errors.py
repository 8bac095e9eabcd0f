"""
Error taxonomy and structured error responses.

Every error body has the shape {"StatusCode", "Message", "Details"}.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


def error_body(status_code: int, message: str, details: Any = None) -> Dict[str, Any]:
    """Build the structured error body."""
    return {"StatusCode": status_code, "Message": message, "Details": details}


class ApiError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code = 500
    default_message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def headers(self) -> Optional[Dict[str, str]]:
        return None

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=error_body(self.status_code, self.message, self.details),
            headers=self.headers(),
        )


class ValidationFailure(ApiError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "One or more validation errors occurred."


class NotFound(ApiError):
    """Requested entity does not exist."""

    status_code = 404
    default_message = "The requested resource was not found."


class Unauthenticated(ApiError):
    """No credential on a protected route."""

    status_code = 401
    default_message = "Authentication required."

    def __init__(self, message: Optional[str] = None, details: Any = None, challenge: Optional[str] = None):
        super().__init__(message, details)
        self.challenge = challenge

    def headers(self) -> Optional[Dict[str, str]]:
        if self.challenge:
            return {"WWW-Authenticate": self.challenge}
        return None


class InvalidCredential(Unauthenticated):
    """Credential present but rejected."""

    default_message = "Authentication failed. Please provide a valid credential."


class RateLimited(ApiError):
    """Too many requests from one source."""

    status_code = 429
    default_message = "Too many requests."

    def __init__(self, message: Optional[str] = None, details: Any = None, retry_after: Optional[int] = None):
        super().__init__(message, details)
        self.retry_after = retry_after

    def headers(self) -> Optional[Dict[str, str]]:
        if self.retry_after is not None:
            return {"Retry-After": str(self.retry_after)}
        return None


def describe_validation_errors(exc: RequestValidationError) -> list:
    """Flatten pydantic validation errors into readable constraint messages."""
    described = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        described.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return described


def register_exception_handlers(app: FastAPI, expose_details: bool = False) -> None:
    """
    Install handlers rendering every error in the structured format.

    Args:
        app: FastAPI application
        expose_details: Include exception text in 500 bodies (development only)
    """

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return exc.to_response()

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors as 400s."""
        details = describe_validation_errors(exc)
        logger.info(f"Validation error on {request.url.path}: {details}")
        return ValidationFailure(details=details).to_response()

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        """Handle any other fault with a generic 500."""
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_body(500, INTERNAL_ERROR_MESSAGE, str(exc) if expose_details else None),
        )
