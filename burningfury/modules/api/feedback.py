"""Feedback endpoint. Public and rate limited per client IP."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..feedback import FeedbackService
from ..middleware.visibility import allow_anonymous
from .dependencies import client_ip, enforce_feedback_rate_limit, get_feedback_service
from .models import Feedback

logger = logging.getLogger(__name__)


def create_feedback_router() -> APIRouter:
    """Create the /api/feedback router."""
    router = APIRouter(prefix="/api/feedback", tags=["Feedback"])

    @router.post("", status_code=202, dependencies=[Depends(enforce_feedback_rate_limit)])
    @allow_anonymous
    async def submit_feedback(
        feedback: Feedback,
        request: Request,
        service: FeedbackService = Depends(get_feedback_service),
    ):
        """
        Submit feedback for forwarding.

        Returns:
            202: Feedback accepted (delivery is best effort)
            400: Invalid feedback
            429: Too many submissions from this address
        """
        await service.submit(feedback, client_ip(request))
        return JSONResponse(status_code=202, content={"message": "Feedback received"})

    return router
