"""
Desk availability checks on the WeWork booking calendar.

For each date the checker types the date into the calendar's date input, waits
for the configured location to show up, then reads the "N desks" line from that
location's card. Anything short of a parsed count is reported as unavailable.
"""

import logging
import re
from datetime import date

from selenium.common.exceptions import WebDriverException

from deskcheck.config import Settings
from deskcheck.exceptions import DeskCheckError, ElementNotFoundError
from deskcheck.models.schemas import AvailabilityResult
from deskcheck.providers.base import BrowserPage
from deskcheck.providers.wait_helper import WaitStrategy
from deskcheck.providers.wework_dom_schema import DOM
from deskcheck.services.date_service import format_display_date, format_input_date
from deskcheck.services.diagnostics import DiagnosticRecorder, slugify

logger = logging.getLogger(__name__)

DESK_COUNT_PATTERN = re.compile(r"(\d+)\s+desk", re.IGNORECASE)


def parse_desk_count(text: str | None) -> int | None:
    """
    Extract the desk count from an availability line such as "3 desks available".

    Returns:
        The count, or None if the text has no "<n> desk" phrase.
    """
    if not text:
        return None
    match = DESK_COUNT_PATTERN.search(text)
    if not match:
        return None
    return int(match.group(1))


class AvailabilityChecker:
    """
    Reads desk availability for the configured location, one date at a time.

    Attributes:
        page: The browser page shared with the rest of the run.
        settings: Location and timeouts for this run.
    """

    def __init__(
        self,
        page: BrowserPage,
        settings: Settings,
        waits: WaitStrategy | None = None,
        diagnostics: DiagnosticRecorder | None = None,
    ) -> None:
        self.page = page
        self.settings = settings
        self.waits = waits or WaitStrategy(settings.wait_mode, settings.poll_interval / 1000)
        self.diagnostics = diagnostics or DiagnosticRecorder(settings)

    @property
    def _timeout(self) -> float:
        return self.settings.default_timeout / 1000

    def navigate_to_booking(self) -> None:
        """
        Open the desk booking page.

        Raises:
            WebDriverException: If the page cannot be loaded.
        """
        logger.info("Navigating to desk booking page...")
        try:
            self.page.goto(self.settings.BOOKING_URL, timeout=self._timeout)
            logger.info(f"Current URL: {self.page.current_url}")
            self._expect_location_text()
            logger.info("Successfully navigated to booking page!")
        except WebDriverException as e:
            logger.error(f"Navigation error: {e}")
            self.diagnostics.capture(self.page, "navigation-error")
            raise

    def _expect_location_text(self) -> bool:
        """
        Soft precondition: the location name should appear on the page.

        A miss is logged and screenshotted but never fails the check, since the
        name can legitimately live on a different sub-view.
        """
        location = self.settings.wework_location
        logger.info(f'Waiting for "{location}" text to appear on screen...')
        if self.waits.wait_for_text(self.page, location, fixed_duration=0.0, timeout=self._timeout):
            logger.info(f'Found "{location}" text on the page')
            return True

        logger.warning(f'Could not find "{location}" text on the page, continuing')
        self.diagnostics.capture(self.page, f"{slugify(location)}-text-not-found")
        return False

    def check_availability(self, target_date: date) -> AvailabilityResult:
        """
        Select ``target_date`` on the calendar and read the location's availability.

        Args:
            target_date: The calendar day to check

        Returns:
            AvailabilityResult for the date; unavailable with no count when inconclusive

        Raises:
            ElementNotFoundError: If the date input is missing.
            WebDriverException: On browser failures.
        """
        iso_date = target_date.isoformat()
        display_date = format_display_date(target_date)
        location = self.settings.wework_location
        logger.info(f"Checking availability for date: {display_date}")

        try:
            self._select_date(target_date)
            result = self._read_availability(target_date)
        except (DeskCheckError, WebDriverException) as e:
            logger.error(f"Error checking availability for {display_date}: {e}")
            self.diagnostics.capture(self.page, f"availability-error-{iso_date}")
            raise

        if result.is_available:
            if result.desks_count is not None:
                logger.info(f"✅ {result.desks_count} desks available on {display_date} at {location}")
            else:
                logger.info(f"✅ Desks are available on {display_date} at {location}")
            self.diagnostics.capture(self.page, f"available-desks-{iso_date}")
        else:
            logger.info(f"❌ No desks available on {display_date} at {location}")

        return result

    def _select_date(self, target_date: date) -> None:
        selector = DOM.BOOKING.date_input
        logger.debug(f"Looking for date input with selector: {selector}")
        self.waits.wait_for_selector(self.page, selector, fixed_duration=0.0, timeout=self._timeout)
        inputs = self.page.query_all(selector)
        if not inputs:
            raise ElementNotFoundError("date input field")
        date_input = inputs[0]

        # The previous view stays on screen until the calendar re-renders
        previous_cards = self.page.query_all(DOM.BOOKING.location_card_title)
        previous_text = self.page.body_text()

        formatted = format_input_date(target_date)
        self.page.clear(date_input)
        self.page.type_text(date_input, formatted)
        self.page.press_enter(date_input)
        logger.info(f"Entered date: {formatted} and pressed Enter")

        if not self.waits.wait_for_refresh(
            self.page,
            previous_cards[0] if previous_cards else None,
            previous_text,
            fixed_duration=1.0,
            timeout=self._timeout,
        ):
            logger.info("Calendar view did not change after selecting the date, reading it as is")
        self._expect_location_text()

        if self.page.is_attached(date_input):
            logger.debug(f"Date input field now contains: {self.page.value_of(date_input)}")
        self.diagnostics.capture(self.page, f"date-selected-{target_date.isoformat()}")

    def _read_availability(self, target_date: date) -> AvailabilityResult:
        # Cards render after the calendar refresh; a timeout here just means no cards.
        self.waits.wait_for_selector(
            self.page, DOM.BOOKING.location_card_title, fixed_duration=2.0, timeout=self._timeout
        )
        logger.info("Checking for desk availability...")

        card_text = self.settings.card_match_text
        for card in self.page.query_all(DOM.BOOKING.location_card_title):
            if card_text not in self.page.text_of(card):
                continue

            logger.info(f"Found location card for {card_text}")
            availability_text = self.page.text_in_container(
                card, DOM.BOOKING.location_card_container, DOM.BOOKING.availability_text
            )
            logger.info(f'Found availability text: "{availability_text}"')
            desks_count = parse_desk_count(availability_text)
            if desks_count is not None:
                return AvailabilityResult.from_desk_count(target_date, desks_count)
            break

        logger.warning("Could not determine desk availability, assuming none are available")
        self.diagnostics.capture(self.page, "desk-availability-check")
        return AvailabilityResult.unavailable(target_date)
