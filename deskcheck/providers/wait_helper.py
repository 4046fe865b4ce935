"""
Wait strategy helper for browser page operations.

This module replaces fixed sleeps with condition waits. The wait mode can be
configured via the WAIT_MODE environment variable.

Three modes are supported:
- FIXED: Use fixed sleep durations (slowest, matches the portal's worst case)
- EVENT_DRIVEN: Poll the condition until it holds or the timeout expires
- HYBRID: Poll the condition, then add a small buffer sleep

Conditions are polled with Selenium's WebDriverWait, which accepts any object
as its "driver", so the same waits run against a BrowserPage test double.
"""

import logging
import time as time_module
from collections.abc import Callable
from typing import Any

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support.ui import WebDriverWait

from deskcheck.config import WaitMode
from deskcheck.providers.base import BrowserPage

logger = logging.getLogger(__name__)

HYBRID_BUFFER_SECONDS = 0.3
DEFAULT_POLL_SECONDS = 0.25


class WaitStrategy:
    """
    Provides wait methods that behave differently based on the configured wait mode.

    Every wait returns True when its condition was observed and False otherwise.
    A timeout is never raised from here; callers decide whether it is fatal.

    Usage:
        waits = WaitStrategy(WaitMode.EVENT_DRIVEN)
        waits.wait_for_selector(page, ".card-title", fixed_duration=2.0, timeout=30.0)
    """

    def __init__(self, mode: WaitMode, poll_interval: float = DEFAULT_POLL_SECONDS) -> None:
        """
        Initialize the wait strategy.

        Args:
            mode: The wait mode to use.
            poll_interval: Seconds between condition checks.
        """
        self.mode = mode
        self.poll_interval = poll_interval
        logger.debug(f"WaitStrategy initialized with mode: {self.mode.value}")

    def wait_until(
        self,
        page: BrowserPage,
        condition: Callable[[BrowserPage], bool],
        description: str,
        fixed_duration: float,
        timeout: float,
    ) -> bool:
        """
        Wait for an arbitrary condition on the page.

        Args:
            page: The page to poll
            condition: Predicate receiving the page
            description: Human readable name of the condition, for logging
            fixed_duration: Duration to sleep in FIXED mode
            timeout: Maximum wait in EVENT_DRIVEN/HYBRID modes, in seconds

        Returns:
            True if the condition held (in FIXED mode, whether it holds after the sleep)
        """
        if self.mode == WaitMode.FIXED:
            logger.debug(f"FIXED mode: sleeping {fixed_duration}s before checking {description}")
            time_module.sleep(fixed_duration)
            return bool(condition(page))

        met = False
        try:
            WebDriverWait(page, timeout, poll_frequency=self.poll_interval).until(condition)
            met = True
            logger.debug(f"{self.mode.value} mode: {description} met")
        except TimeoutException:
            logger.debug(f"{self.mode.value} mode: timeout after {timeout}s waiting for {description}")

        if self.mode == WaitMode.HYBRID:
            logger.debug(f"HYBRID mode: adding {HYBRID_BUFFER_SECONDS}s buffer")
            time_module.sleep(HYBRID_BUFFER_SECONDS)

        return met

    def wait_for_selector(
        self, page: BrowserPage, selector: str, fixed_duration: float, timeout: float
    ) -> bool:
        """Wait for at least one element to match ``selector``."""
        return self.wait_until(
            page,
            lambda p: len(p.query_all(selector)) > 0,
            f"selector {selector}",
            fixed_duration,
            timeout,
        )

    def wait_for_text(self, page: BrowserPage, text: str, fixed_duration: float, timeout: float) -> bool:
        """Wait for ``text`` to appear anywhere in the page body."""
        return self.wait_until(
            page,
            lambda p: text in p.body_text(),
            f'text "{text}"',
            fixed_duration,
            timeout,
        )

    def wait_for_url_change(
        self, page: BrowserPage, previous_url: str, fixed_duration: float, timeout: float
    ) -> bool:
        """Wait for a navigation away from ``previous_url``."""
        return self.wait_until(
            page,
            lambda p: p.current_url != previous_url,
            f"navigation away from {previous_url}",
            fixed_duration,
            timeout,
        )

    def wait_for_refresh(
        self,
        page: BrowserPage,
        previous_element: Any | None,
        previous_text: str,
        fixed_duration: float,
        timeout: float,
    ) -> bool:
        """
        Wait for the page to re-render after an in-place update.

        The update counts as rendered once ``previous_element`` is detached from
        the document or the body text no longer equals ``previous_text``.

        Args:
            page: The page to poll
            previous_element: An element queried before the update, or None
            previous_text: page.body_text() taken before the update
            fixed_duration: Duration to sleep in FIXED mode
            timeout: Maximum wait in EVENT_DRIVEN/HYBRID modes, in seconds
        """

        def refreshed(p: BrowserPage) -> bool:
            if previous_element is not None and not p.is_attached(previous_element):
                return True
            return p.body_text() != previous_text

        return self.wait_until(page, refreshed, "page refresh", fixed_duration, timeout)
