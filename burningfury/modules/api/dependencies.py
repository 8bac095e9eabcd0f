"""FastAPI dependencies resolving per-request collaborators."""

from typing import Optional

from fastapi import HTTPException, Request

from ..auth.interfaces import Identity
from ..feedback import FeedbackService, SlidingWindowRateLimiter
from ..players import PlayerStore
from .errors import RateLimited, Unauthenticated


def get_player_store(request: Request) -> PlayerStore:
    store = getattr(request.app.state, "player_store", None)
    if store is None:
        raise HTTPException(503, "Service not initialized")
    return store


def get_feedback_service(request: Request) -> FeedbackService:
    service = getattr(request.app.state, "feedback_service", None)
    if service is None:
        raise HTTPException(503, "Service not initialized")
    return service


def get_identity(request: Request) -> Optional[Identity]:
    """Identity attached by the authentication gate, if any."""
    return getattr(request.state, "identity", None)


def require_identity(request: Request) -> Identity:
    """Identity attached by the authentication gate; 401 when absent."""
    identity = get_identity(request)
    if identity is None:
        raise Unauthenticated()
    return identity


def client_ip(request: Request) -> str:
    return request.client.host if request.client else ""


async def enforce_feedback_rate_limit(request: Request) -> None:
    """Take a feedback permit for the caller's IP or reject with 429."""
    limiter: SlidingWindowRateLimiter = getattr(request.app.state, "feedback_rate_limiter", None)
    if limiter is None:
        raise HTTPException(503, "Service not initialized")
    decision = await limiter.acquire(client_ip(request) or "unknown")
    if not decision.allowed:
        raise RateLimited(
            "Too many feedback submissions. Please try again later.",
            retry_after=decision.retry_after,
        )
