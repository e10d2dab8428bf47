"""
Notification Service
====================

Relays new questions to the page owner through a Discord webhook.

One POST per question, no retries. Any non-2xx status, transport error or
unreadable response raises NotificationDeliveryError; the caller decides
what that means for the request.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from fragekasten.models.schemas import WebhookEmbed, WebhookPayload

logger = logging.getLogger(__name__)

QUESTION_EMBED_TITLE = "New Question"
QUESTION_EMBED_COLOR = 3447003  # #3498db

_TIMEOUT = httpx.Timeout(10.0, connect=5.0)

# Shared client singleton
_client: Optional[httpx.AsyncClient] = None


def _get_client() -> httpx.AsyncClient:
    """Return shared httpx.AsyncClient, creating on first use."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=_TIMEOUT,
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
        )
    return _client


async def close_notification_client() -> None:
    """Close the shared client at shutdown."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


class NotificationDeliveryError(Exception):
    """Raised when the webhook did not accept a notification."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


def build_question_notification(
    content: str,
    owner_name: str,
    user_id: Optional[int],
    now: Optional[datetime] = None,
) -> WebhookPayload:
    """Build the webhook message announcing a new question."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return WebhookPayload(
        username=f"{owner_name}'s Fragekasten",
        content=f"<@{user_id}>" if user_id is not None else "",
        embeds=[
            WebhookEmbed(
                title=QUESTION_EMBED_TITLE,
                description=content,
                color=QUESTION_EMBED_COLOR,
                timestamp=timestamp,
            )
        ],
    )


class DiscordWebhookSink:
    """Delivers notification payloads to a preconfigured webhook URL."""

    def __init__(self, webhook_url: Optional[str]):
        self.webhook_url = webhook_url

    async def deliver(self, payload: WebhookPayload) -> None:
        """POST *payload* to the webhook.

        Raises:
            NotificationDeliveryError: On transport failure or non-2xx status.
        """
        if not self.webhook_url:
            raise NotificationDeliveryError("no webhook URL configured")

        try:
            response = await _get_client().post(
                self.webhook_url,
                json=payload.model_dump(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise NotificationDeliveryError(f"webhook request failed: {exc}") from exc

        if response.is_success:
            logger.debug("Webhook accepted notification (status %d)", response.status_code)
            return

        try:
            body = response.text
        except (httpx.HTTPError, UnicodeDecodeError) as exc:
            raise NotificationDeliveryError(
                f"webhook returned {response.status_code} and the response body could not be read: {exc}",
                status_code=response.status_code,
            ) from exc

        raise NotificationDeliveryError(
            f"webhook returned {response.status_code}: {body}",
            status_code=response.status_code,
            detail=body,
        )
