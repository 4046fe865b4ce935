import logging
import re
from pathlib import Path

from selenium.common.exceptions import WebDriverException

from deskcheck.config import Settings
from deskcheck.providers.base import BrowserPage

logger = logging.getLogger(__name__)


def slugify(label: str) -> str:
    """Turn a free-form label into a file-name-safe slug, e.g. "10 York Rd" -> "10-york-rd"."""
    return re.sub(r"[^a-z0-9]+", "-", label.lower()).strip("-")


class DiagnosticRecorder:
    """Captures diagnostic screenshots into the configured directory."""

    def __init__(self, settings: Settings) -> None:
        self.enabled = settings.enable_screenshots
        self.directory = Path(settings.screenshots_dir)

    def prepare(self) -> None:
        """Create the screenshot directory if screenshots are enabled."""
        if self.enabled:
            self.directory.mkdir(parents=True, exist_ok=True)

    def capture(self, page: BrowserPage, label: str) -> Path | None:
        """
        Save a screenshot named after ``label``.

        Failures are logged and swallowed so a broken page never masks the error
        that triggered the capture.

        Returns:
            The screenshot path, or None if screenshots are disabled or capture failed.
        """
        if not self.enabled:
            logger.debug(f"Screenshots disabled, skipping screenshot for {label}")
            return None

        path = self.directory / f"{slugify(label)}.png"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            page.screenshot(str(path))
        except (WebDriverException, OSError) as e:
            logger.warning(f"Failed to capture screenshot for {label}: {e}")
            return None

        logger.info(f"Screenshot saved to {path}")
        return path
