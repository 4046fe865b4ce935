from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class NotificationResult:
    success: bool
    status_code: int | None = None
    error_message: str | None = None


class Notifier(ABC):
    """Abstract base class for availability report sinks."""

    @abstractmethod
    async def send(self, payload: dict[str, Any]) -> NotificationResult:
        """
        Deliver a message payload.

        Args:
            payload: The JSON-serializable message body.

        Returns:
            NotificationResult describing the sink's response.

        Raises:
            NotificationDeliveryError: If the message never reached the sink.
        """
        pass
