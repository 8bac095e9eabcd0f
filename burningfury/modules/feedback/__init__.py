"""
Feedback Module - Black Box Interface

Purpose: Forward user feedback to a chat webhook, rate limited per client
Interface: FeedbackService.submit(), SlidingWindowRateLimiter.acquire()
Hidden: Webhook payload format, window bookkeeping
"""

from .ratelimit import RateLimitDecision, SlidingWindowRateLimiter
from .service import FeedbackService, build_webhook_payload

__all__ = [
    "FeedbackService",
    "RateLimitDecision",
    "SlidingWindowRateLimiter",
    "build_webhook_payload",
]
