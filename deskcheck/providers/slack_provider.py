import logging
from typing import Any

import httpx

from deskcheck.exceptions import NotificationDeliveryError
from deskcheck.providers.notifier_base import NotificationResult, Notifier

logger = logging.getLogger(__name__)


class SlackWebhookNotifier(Notifier):
    """Posts messages to a Slack incoming webhook."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._transport = transport

    async def send(self, payload: dict[str, Any]) -> NotificationResult:
        """
        POST the payload as JSON to the webhook.

        Any status code is returned to the caller; only transport failures raise.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(self.webhook_url, json=payload)
        except httpx.TimeoutException as e:
            raise NotificationDeliveryError(f"Slack webhook timed out: {e}") from e
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(f"Cannot reach Slack webhook: {e}") from e

        if resp.is_success:
            return NotificationResult(success=True, status_code=resp.status_code)
        return NotificationResult(
            success=False, status_code=resp.status_code, error_message=resp.text
        )


class MockNotifier(Notifier):
    """Mock notifier for testing and dry runs."""

    def __init__(self) -> None:
        self.sent_payloads: list[dict[str, Any]] = []

    async def send(self, payload: dict[str, Any]) -> NotificationResult:
        """Record the payload and return a mock success result."""
        self.sent_payloads.append(payload)
        logger.info(f"[Slack Mock] {payload.get('text', '')}")
        return NotificationResult(success=True, status_code=200)
