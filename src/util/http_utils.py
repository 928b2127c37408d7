"""
HTTP helpers for outbound webhooks.
"""

from typing import Any, Dict, Optional

import httpx

from src.crm.errors import DeliveryError
from src.util.logging import get_logger

logger = get_logger(__name__)


async def post_json_data(
    url: str,
    data: Dict[str, Any],
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """
    Send JSON data to an endpoint in a single attempt.

    Args:
        url: Endpoint URL
        data: JSON body
        timeout: Timeout in seconds
        transport: Optional httpx transport, used by tests

    Returns:
        httpx.Response: The successful response

    Raises:
        DeliveryError: On transport failure, timeout or non-2xx status
    """
    headers = {"Content-Type": "application/json"}

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(url, json=data, headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"POST failed: {type(e).__name__} - {e}")
        raise DeliveryError(f"POST failed: {e}") from e

    if response.is_error:
        logger.error(f"HTTP error: {response.status_code} - {response.text}")
        raise DeliveryError(
            "Webhook rejected the message",
            status=response.status_code,
            body=response.text,
        )

    return response


class SlackWebhook:
    """Posts messages to a Slack incoming webhook."""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    async def post(self, url: str, payload: Dict[str, Any]) -> None:
        await post_json_data(
            url, payload, timeout=self.timeout, transport=self.transport
        )
        logger.debug("Message delivered to Slack")
