class DeskCheckError(Exception):
    """Base class for desk availability check failures."""


class ConfigurationError(DeskCheckError):
    """Required configuration is missing or malformed."""


class ElementNotFoundError(DeskCheckError):
    """An expected control was not present on the page."""

    def __init__(self, control: str) -> None:
        self.control = control
        super().__init__(f"Could not find {control}")


class AuthenticationError(DeskCheckError):
    """The login flow finished but the session is not authenticated."""


class NotificationDeliveryError(DeskCheckError):
    """The availability report could not be delivered."""
