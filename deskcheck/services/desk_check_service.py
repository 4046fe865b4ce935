"""
End-to-end desk availability run.

This module sequences a single run: authenticate, open the booking calendar,
check each target date in order, report, and optionally log out. The browser
page is created once per run and always closed at the end.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import date

from selenium.common.exceptions import WebDriverException

from deskcheck.config import Settings
from deskcheck.exceptions import AuthenticationError, ConfigurationError
from deskcheck.models.schemas import AvailabilityResult, RunState
from deskcheck.providers.base import BrowserPage
from deskcheck.providers.selenium_page import create_page
from deskcheck.providers.wait_helper import WaitStrategy
from deskcheck.services.auth_service import Authenticator
from deskcheck.services.availability_service import AvailabilityChecker
from deskcheck.services.date_service import next_target_dates
from deskcheck.services.diagnostics import DiagnosticRecorder
from deskcheck.services.report_service import Reporter

logger = logging.getLogger(__name__)


class DeskCheckService:
    """
    Runs the availability check workflow.

    States: INIT -> AUTHENTICATING -> NAVIGATING -> CHECKING_DATES -> REPORTING
    -> LOGGING_OUT (optional) -> DONE, with FAILED reachable from any
    non-terminal state before REPORTING.

    All blocking browser work runs via asyncio.to_thread(), one call at a time;
    dates are never checked concurrently.

    Attributes:
        state: The current RunState, for logging and tests.
        current_date_index: Index of the date being checked while in CHECKING_DATES.
    """

    def __init__(
        self,
        settings: Settings,
        page_factory: Callable[[Settings], BrowserPage] | None = None,
        reporter: Reporter | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings
        self._page_factory = page_factory or create_page
        self.reporter = reporter or Reporter(settings)
        self._today = today
        self.state = RunState.INIT
        self.current_date_index: int | None = None

    def _transition(self, state: RunState) -> None:
        logger.debug(f"Run state: {self.state.value} -> {state.value}")
        self.state = state

    def target_dates(self) -> list[date]:
        """Next occurrence of each configured weekday, counted from today."""
        dates = next_target_dates(self._today(), self.settings.target_weekdays)
        logger.info(f"Generated target dates: {', '.join(d.isoformat() for d in dates)}")
        return dates

    async def run(self, dates: Sequence[date] | None = None) -> list[AvailabilityResult]:
        """
        Execute one full run.

        Args:
            dates: Dates to check, in order. Defaults to target_dates().

        Returns:
            One AvailabilityResult per date, in input order.

        Raises:
            ConfigurationError: Before any browser is launched, if settings are incomplete.
            AuthenticationError: If the session cannot be verified after login.
            ElementNotFoundError: If a required control is missing.
            WebDriverException: On browser failures.
        """
        try:
            self.settings.validate_required()
        except ConfigurationError:
            self._transition(RunState.FAILED)
            raise
        target_dates = list(dates) if dates is not None else self.target_dates()

        logger.info("Starting WeWork desk availability check...")
        diagnostics = DiagnosticRecorder(self.settings)
        diagnostics.prepare()
        waits = WaitStrategy(self.settings.wait_mode, self.settings.poll_interval / 1000)

        try:
            page = await asyncio.to_thread(self._page_factory, self.settings)
        except Exception as e:
            self._transition(RunState.FAILED)
            logger.error(f"Could not launch the browser: {e}")
            raise

        try:
            authenticator = Authenticator(page, self.settings, waits, diagnostics)
            checker = AvailabilityChecker(page, self.settings, waits, diagnostics)

            try:
                results = await self._check_dates(authenticator, checker, target_dates)
            except Exception as e:
                self._transition(RunState.FAILED)
                logger.error(f"An error occurred during the availability check: {e}")
                await asyncio.to_thread(diagnostics.capture, page, "error")
                raise

            self._transition(RunState.REPORTING)
            await self.reporter.report(results, self.settings.wework_location)
            self._log_summary(results)

            if self.settings.logout_after_completion:
                self._transition(RunState.LOGGING_OUT)
                try:
                    await asyncio.to_thread(authenticator.logout)
                except Exception as e:
                    logger.error(f"Error during logout: {e}")

            self._transition(RunState.DONE)
            logger.info("Availability check completed successfully!")
            return results
        finally:
            await self._close_page(page)

    async def _close_page(self, page: BrowserPage) -> None:
        # Close errors never mask the run's result
        try:
            await asyncio.to_thread(page.close)
        except (WebDriverException, OSError) as e:
            logger.warning(f"Error closing the browser: {e}")

    async def _check_dates(
        self,
        authenticator: Authenticator,
        checker: AvailabilityChecker,
        target_dates: list[date],
    ) -> list[AvailabilityResult]:
        self._transition(RunState.AUTHENTICATING)
        await asyncio.to_thread(authenticator.login)
        if not await asyncio.to_thread(authenticator.is_logged_in):
            raise AuthenticationError("Login failed. Could not verify logged in status.")
        logger.info("Successfully logged in and verified!")

        self._transition(RunState.NAVIGATING)
        await asyncio.to_thread(checker.navigate_to_booking)

        self._transition(RunState.CHECKING_DATES)
        results: list[AvailabilityResult] = []
        for index, target_date in enumerate(target_dates):
            if index > 0:
                # Rate-limiting courtesy towards the portal between checks
                await asyncio.sleep(self.settings.check_interval / 1000)
            self.current_date_index = index
            results.append(await asyncio.to_thread(checker.check_availability, target_date))
        return results

    def _log_summary(self, results: list[AvailabilityResult]) -> None:
        logger.info("Availability summary:")
        for result in results:
            if result.is_available:
                count = result.desks_count if result.desks_count is not None else "unknown"
                status = f"✅ Available ({count} desks)"
            else:
                status = "❌ Not available"
            logger.info(f"{result.target_date.isoformat()}: {status}")
