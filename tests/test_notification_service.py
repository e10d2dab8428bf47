"""
Tests for the Discord webhook notification sink.
HTTP is mocked by patching httpx.AsyncClient.post.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from fragekasten.services.notification_service import (
    QUESTION_EMBED_COLOR,
    DiscordWebhookSink,
    NotificationDeliveryError,
    build_question_notification,
    close_notification_client,
)

WEBHOOK_URL = "https://discord.test/api/webhooks/42/secret"


def _response(status_code: int, text: str = "") -> httpx.Response:
    return httpx.Response(
        status_code,
        text=text,
        request=httpx.Request("POST", WEBHOOK_URL),
    )


class TestPayloadBuilding:
    def test_payload_fields(self):
        now = datetime(2026, 10, 19, 12, 30, tzinfo=timezone.utc)
        payload = build_question_notification("Do you like tea?", "Robin", 1234, now=now)

        data = payload.model_dump()
        assert data["username"] == "Robin's Fragekasten"
        assert data["content"] == "<@1234>"
        assert len(data["embeds"]) == 1
        embed = data["embeds"][0]
        assert embed["title"] == "New Question"
        assert embed["description"] == "Do you like tea?"
        assert embed["color"] == QUESTION_EMBED_COLOR == 3447003
        assert embed["timestamp"] == "2026-10-19T12:30:00+00:00"

    def test_timestamp_defaults_to_now_utc(self):
        payload = build_question_notification("Do you like tea?", "Robin", 1234)
        parsed = datetime.fromisoformat(payload.embeds[0].timestamp)
        assert parsed.tzinfo is not None

    def test_no_mention_without_user_id(self):
        payload = build_question_notification("Do you like tea?", "Robin", None)
        assert payload.content == ""


class TestDelivery:
    @pytest.mark.asyncio
    async def test_successful_delivery(self):
        sink = DiscordWebhookSink(WEBHOOK_URL)
        payload = build_question_notification("Do you like tea?", "Robin", 1234)

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=_response(204)) as mock_post:
            await sink.deliver(payload)

        mock_post.assert_awaited_once()
        assert mock_post.call_args.args[0] == WEBHOOK_URL
        assert mock_post.call_args.kwargs["json"] == payload.model_dump()
        assert mock_post.call_args.kwargs["headers"]["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_error_status_raises_with_body(self):
        sink = DiscordWebhookSink(WEBHOOK_URL)
        payload = build_question_notification("Do you like tea?", "Robin", 1234)

        with patch(
            "httpx.AsyncClient.post",
            new_callable=AsyncMock,
            return_value=_response(500, '{"message": "Internal Server Error"}'),
        ):
            with pytest.raises(NotificationDeliveryError) as exc_info:
                await sink.deliver(payload)

        assert exc_info.value.status_code == 500
        assert "Internal Server Error" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_client_error_status_raises(self):
        sink = DiscordWebhookSink(WEBHOOK_URL)
        payload = build_question_notification("Do you like tea?", "Robin", 1234)

        with patch(
            "httpx.AsyncClient.post",
            new_callable=AsyncMock,
            return_value=_response(404, '{"message": "Unknown Webhook", "code": 10015}'),
        ) as mock_post:
            with pytest.raises(NotificationDeliveryError) as exc_info:
                await sink.deliver(payload)

        # Single attempt, no retries
        assert mock_post.await_count == 1
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        sink = DiscordWebhookSink(WEBHOOK_URL)
        payload = build_question_notification("Do you like tea?", "Robin", 1234)

        with patch(
            "httpx.AsyncClient.post",
            new_callable=AsyncMock,
            side_effect=httpx.ConnectError("connection refused"),
        ):
            with pytest.raises(NotificationDeliveryError) as exc_info:
                await sink.deliver(payload)

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_missing_webhook_url_raises_without_request(self):
        sink = DiscordWebhookSink(None)
        payload = build_question_notification("Do you like tea?", "Robin", 1234)

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            with pytest.raises(NotificationDeliveryError):
                await sink.deliver(payload)

        mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_client_is_safe_to_repeat(self):
        await close_notification_client()
        await close_notification_client()
