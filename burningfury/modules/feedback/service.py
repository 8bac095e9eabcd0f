"""
Feedback forwarding.

Posts feedback to a chat webhook as an embed. Delivery is best effort:
configuration gaps and webhook failures are logged, never raised.
"""

import logging
from datetime import UTC, datetime
from typing import Any, Dict, Optional

import httpx

from ..api.models import Feedback

logger = logging.getLogger(__name__)

EMBED_COLOR = 0xFFA500  # orange
MESSAGE_FIELD_LIMIT = 1000


def truncate(value: str, limit: int) -> str:
    return value if len(value) <= limit else value[: limit - 3] + "..."


def display_name(feedback: Feedback) -> str:
    if feedback.anonymous:
        return "Anonymous"
    if not feedback.name or not feedback.name.strip():
        return "Unknown"
    return feedback.name.strip()


def build_webhook_payload(feedback: Feedback) -> Dict[str, Any]:
    """Build the webhook embed for a feedback submission."""
    return {
        "username": "Feedback Bot",
        "embeds": [
            {
                "title": "New Feedback Received",
                "color": EMBED_COLOR,
                "fields": [
                    {"name": "From", "value": display_name(feedback), "inline": True},
                    {"name": "Anonymous", "value": "Yes" if feedback.anonymous else "No", "inline": True},
                    {"name": "Message", "value": truncate(feedback.message, MESSAGE_FIELD_LIMIT), "inline": False},
                ],
                "timestamp": datetime.now(UTC).isoformat(),
            }
        ],
    }


class FeedbackService:
    """Forwards feedback to the configured webhook."""

    def __init__(self, http_client: httpx.AsyncClient, webhook_url: Optional[str]):
        """
        Args:
            http_client: Shared async HTTP client
            webhook_url: Webhook endpoint; None disables forwarding
        """
        self.http_client = http_client
        self.webhook_url = webhook_url

    async def submit(self, feedback: Feedback, ip_address: str = "") -> None:
        """
        Forward feedback to the webhook.

        Never raises for delivery problems. Cancellation of the calling
        request propagates and aborts the POST.
        """
        if not self.webhook_url:
            logger.warning("Feedback webhook url not configured (FEEDBACK_WEBHOOK_URL)")
            return

        payload = build_webhook_payload(feedback)
        try:
            response = await self.http_client.post(self.webhook_url, json=payload)
            if response.is_success:
                logger.info(f"Feedback forwarded (source {ip_address or 'n/a'})")
            else:
                logger.warning(f"Failed to post feedback to webhook. Status: {response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Error submitting feedback to webhook: {e}")
