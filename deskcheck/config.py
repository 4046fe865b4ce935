from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsError

from deskcheck.exceptions import ConfigurationError


class WaitMode(str, Enum):
    FIXED = "fixed"
    EVENT_DRIVEN = "event_driven"
    HYBRID = "hybrid"


class NotificationFormat(str, Enum):
    COMBINED = "combined"
    ATTACHMENTS = "attachments"


class WindowPosition(BaseModel):
    x: int
    y: int


class Settings(BaseSettings):
    BASE_URL: ClassVar[str] = "https://www.wework.com"
    LOGIN_URL: ClassVar[str] = "https://members.wework.com/workplaceone/content2/login/welcome"
    BOOKING_URL: ClassVar[str] = "https://members.wework.com/workplaceone/content2/bookings/desks"

    wework_email: str = ""
    wework_password: str = ""
    wework_location: str = "10 York Rd"
    wework_location_card_text: str = ""

    screenshots_dir: str = "./screenshots"
    enable_screenshots: bool = True

    headless: bool = True
    slow_mo: int = 0
    use_second_display: bool = False
    window_position: WindowPosition | None = None

    # Milliseconds
    default_timeout: int = 30000
    login_timeout: int = 60000
    poll_interval: int = 250
    check_interval: int = 2000

    wait_mode: WaitMode = WaitMode.EVENT_DRIVEN
    logout_after_completion: bool = True
    target_weekdays: list[int] = [1, 3]

    slack_webhook_url: str = ""
    notification_format: NotificationFormat = NotificationFormat.COMBINED
    notification_timeout: float = 10.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        frozen = True

    @field_validator("headless", "logout_after_completion", "enable_screenshots", mode="before")
    @classmethod
    def _enabled_unless_false(cls, value: Any) -> Any:
        # Only the literal string "false" turns these off.
        if isinstance(value, str):
            return value.strip().lower() != "false"
        return value

    @field_validator("use_second_display", mode="before")
    @classmethod
    def _disabled_unless_true(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @field_validator("target_weekdays")
    @classmethod
    def _check_weekdays(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("target_weekdays must name at least one weekday")
        for day in value:
            if not 0 <= day <= 6:
                raise ValueError(f"Invalid weekday {day}; expected 0 (Monday) to 6 (Sunday)")
        return value

    @property
    def card_match_text(self) -> str:
        """Substring identifying the configured location's card on the booking page."""
        return self.wework_location_card_text or self.wework_location

    def validate_required(self) -> None:
        """
        Fail fast when credentials or the location are missing.

        Raises:
            ConfigurationError: If email, password or location is empty.
        """
        if not self.wework_email or not self.wework_password:
            raise ConfigurationError("WEWORK_EMAIL and WEWORK_PASSWORD must be set")
        if not self.wework_location:
            raise ConfigurationError("WEWORK_LOCATION must be set")


def load_settings(**overrides: Any) -> Settings:
    """
    Build the settings for a single run.

    Args:
        **overrides: Field values taking precedence over the environment.

    Returns:
        The immutable Settings instance.

    Raises:
        ConfigurationError: If any value cannot be parsed (e.g. malformed WINDOW_POSITION JSON).
    """
    try:
        return Settings(**overrides)
    except (ValidationError, SettingsError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
