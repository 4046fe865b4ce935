"""
Availability reporting.

Builds one combined Slack message for all checked dates and delivers it. A
failed delivery is logged and never interrupts the run.
"""

import logging
import time as time_module
from collections.abc import Sequence
from typing import Any

from deskcheck.config import NotificationFormat, Settings
from deskcheck.exceptions import NotificationDeliveryError
from deskcheck.models.schemas import AvailabilityResult
from deskcheck.providers.notifier_base import Notifier
from deskcheck.providers.slack_provider import SlackWebhookNotifier
from deskcheck.services.date_service import format_display_date

logger = logging.getLogger(__name__)

AVAILABLE_EMOJI = "✅"
UNAVAILABLE_EMOJI = "❌"


def status_text(result: AvailabilityResult) -> str:
    if not result.is_available:
        return "*No desks available*"
    if result.desks_count is not None:
        return f"*{result.desks_count} desks available*"
    return "*Desks are available*"


def format_result_line(result: AvailabilityResult) -> str:
    """One line per date, e.g. "✅ March 18, 2025: *3 desks available*"."""
    emoji = AVAILABLE_EMOJI if result.is_available else UNAVAILABLE_EMOJI
    return f"{emoji} {format_display_date(result.target_date)}: {status_text(result)}"


def build_title(location_name: str) -> str:
    return f"*WeWork Desk Availability for {location_name}*"


def build_booking_link(login_url: str) -> str:
    return f"<{login_url}|*Click here to book a desk*>"


def build_combined_message(
    results: Sequence[AvailabilityResult], location_name: str, login_url: str
) -> str:
    """Title, one line per date in input order, then the booking link."""
    sections = "\n".join(format_result_line(result) for result in results)
    return f"{build_title(location_name)}\n\n{sections}\n\n{build_booking_link(login_url)}"


def build_attachment(result: AvailabilityResult, location_name: str) -> dict[str, Any]:
    display_date = format_display_date(result.target_date)
    emoji = AVAILABLE_EMOJI if result.is_available else UNAVAILABLE_EMOJI
    return {
        "color": "good" if result.is_available else "danger",
        "pretext": "WeWork Desk Availability Update",
        "text": f"{emoji} {status_text(result)} on {display_date} at {location_name}",
        "fields": [
            {"title": "Date", "value": display_date, "short": True},
            {"title": "Location", "value": location_name, "short": True},
        ],
        "footer": "WeWork Desk Availability Check",
        "ts": int(time_module.time()),
    }


class Reporter:
    """
    Formats availability results and sends them to the configured webhook.

    Attributes:
        settings: Webhook URL and message format for this run.
    """

    def __init__(self, settings: Settings, notifier: Notifier | None = None) -> None:
        self.settings = settings
        self._notifier = notifier

    @property
    def notifier(self) -> Notifier:
        """Lazily create the Slack notifier unless one was injected."""
        if self._notifier is None:
            self._notifier = SlackWebhookNotifier(
                self.settings.slack_webhook_url, timeout=self.settings.notification_timeout
            )
        return self._notifier

    def build_payload(
        self, results: Sequence[AvailabilityResult], location_name: str
    ) -> dict[str, Any]:
        login_url = self.settings.LOGIN_URL
        if self.settings.notification_format == NotificationFormat.ATTACHMENTS:
            return {
                "text": f"{build_title(location_name)}\n{build_booking_link(login_url)}",
                "attachments": [build_attachment(result, location_name) for result in results],
            }
        return {"text": build_combined_message(results, location_name, login_url)}

    async def report(
        self, results: Sequence[AvailabilityResult], location_name: str | None = None
    ) -> bool:
        """
        Send one message summarizing every result.

        Does nothing when no webhook is configured or there is nothing to report.
        Never raises on delivery problems.

        Returns:
            True if the webhook accepted the message.
        """
        if not self.settings.slack_webhook_url:
            logger.info("Slack webhook URL not configured, skipping notification")
            return False
        if not results:
            logger.info("No availability results to send, skipping notification")
            return False

        location_name = location_name or self.settings.wework_location
        payload = self.build_payload(results, location_name)
        logger.info("Sending combined desk availability notification to Slack...")
        try:
            result = await self.notifier.send(payload)
        except NotificationDeliveryError as e:
            logger.error(f"Error sending combined Slack notification: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error sending Slack notification: {e}")
            return False

        if not result.success:
            logger.warning(
                f"Slack notification returned status {result.status_code}: {result.error_message}"
            )
            return False

        logger.info("Successfully sent combined notification to Slack")
        return True
