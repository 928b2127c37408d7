"""Tests for the Slack webhook sender."""

import json

import httpx
import pytest

from conftest import WEBHOOK_URL
from src.crm.errors import DeliveryError
from src.util.http_utils import SlackWebhook, post_json_data


class TestSlackWebhook:
    @pytest.mark.asyncio
    async def test_posts_json_payload(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="ok")

        webhook = SlackWebhook(timeout=5, transport=httpx.MockTransport(handler))

        await webhook.post(WEBHOOK_URL, {"text": "hello", "attachments": []})

        [request] = seen
        assert request.method == "POST"
        assert str(request.url) == WEBHOOK_URL
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"text": "hello", "attachments": []}

    @pytest.mark.asyncio
    async def test_rejected_message_raises_delivery_error(self):
        def handler(request):
            return httpx.Response(500, text="invalid_payload")

        webhook = SlackWebhook(transport=httpx.MockTransport(handler))

        with pytest.raises(DeliveryError) as exc_info:
            await webhook.post(WEBHOOK_URL, {"text": "hello"})

        assert exc_info.value.status == 500
        assert exc_info.value.body == "invalid_payload"

    @pytest.mark.asyncio
    async def test_transport_failure_raises_delivery_error(self):
        def handler(request):
            raise httpx.ConnectError("no route", request=request)

        webhook = SlackWebhook(transport=httpx.MockTransport(handler))

        with pytest.raises(DeliveryError):
            await webhook.post(WEBHOOK_URL, {"text": "hello"})

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(DeliveryError):
            await post_json_data(
                WEBHOOK_URL, {"text": "hi"}, transport=httpx.MockTransport(handler)
            )

        assert len(calls) == 1
