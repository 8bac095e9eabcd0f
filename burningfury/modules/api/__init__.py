"""
API Module - Black Box Interface

Purpose: HTTP routing and module orchestration
Interface: REST API endpoints, shared models, structured errors
Hidden: Module initialization, request handling, error responses

The API module only orchestrates - it contains no business logic.
All logic is delegated to appropriate modules. Routers are imported
from their own submodules to keep this package import-light.
"""

from .errors import (
    ApiError,
    InvalidCredential,
    NotFound,
    RateLimited,
    Unauthenticated,
    ValidationFailure,
)
from .models import (
    ErrorResponse,
    Feedback,
    PaginatedResult,
    Player,
    PlayerInput,
    SearchParameters,
)

__all__ = [
    "ApiError",
    "ErrorResponse",
    "Feedback",
    "InvalidCredential",
    "NotFound",
    "PaginatedResult",
    "Player",
    "PlayerInput",
    "RateLimited",
    "SearchParameters",
    "Unauthenticated",
    "ValidationFailure",
]
