"""
Login, session verification and logout for the WeWork member portal.
"""

import logging
from typing import Any

from selenium.common.exceptions import WebDriverException

from deskcheck.config import Settings
from deskcheck.exceptions import DeskCheckError, ElementNotFoundError
from deskcheck.providers.base import BrowserPage
from deskcheck.providers.wait_helper import WaitStrategy
from deskcheck.providers.wework_dom_schema import DOM
from deskcheck.services.diagnostics import DiagnosticRecorder

logger = logging.getLogger(__name__)


class Authenticator:
    """
    Drives the member login form and checks the resulting session.

    Attributes:
        page: The browser page shared with the rest of the run.
        settings: Credentials and timeouts for this run.
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
    def _login_timeout(self) -> float:
        return self.settings.login_timeout / 1000

    @property
    def _default_timeout(self) -> float:
        return self.settings.default_timeout / 1000

    def _locate(self, control: str, selector: str, fixed_duration: float) -> Any:
        """
        Wait for and return the first element matching ``selector``.

        Raises:
            ElementNotFoundError: If nothing matches once the wait is over.
        """
        self.waits.wait_for_selector(self.page, selector, fixed_duration, self._login_timeout)
        elements = self.page.query_all(selector)
        logger.debug(f"Found {len(elements)} {control}(s) with selector: {selector}")
        if not elements:
            raise ElementNotFoundError(control)
        return elements[0]

    def login(self) -> None:
        """
        Sign in with the configured email and password.

        Steps, in order: member log in button, email, password, submit.
        Exactly one diagnostic screenshot is taken if any step fails.

        Raises:
            ElementNotFoundError: If a login control is missing.
            WebDriverException: On browser failures, including page load timeouts.
        """
        logger.info("Logging in to WeWork...")
        try:
            logger.info("Going directly to login URL...")
            self.page.goto(self.settings.LOGIN_URL, timeout=self._login_timeout)

            logger.info("Clicking member log in button...")
            self.page.click(self._locate("member log in button", DOM.LOGIN.member_login_button, 3.0))

            logger.info("Entering email...")
            email_input = self._locate("email field", DOM.LOGIN.email_input, 2.0)
            self.page.type_text(email_input, self.settings.wework_email)

            logger.info("Entering password...")
            password_input = self._locate("password field", DOM.LOGIN.password_input, 0.0)
            self.page.type_text(password_input, self.settings.wework_password)

            logger.info("Clicking final login button...")
            submit_button = self._locate("login button", DOM.LOGIN.submit_button, 0.0)
            previous_url = self.page.current_url
            self.page.click(submit_button)
            if not self.waits.wait_for_url_change(
                self.page, previous_url, fixed_duration=5.0, timeout=self._login_timeout
            ):
                logger.info("No navigation after submitting the login form, continuing")

            logger.info(f"Current URL after login: {self.page.current_url}")
            logger.info("Login process completed!")
        except (DeskCheckError, WebDriverException) as e:
            logger.error(f"Login error: {e}")
            self.diagnostics.capture(self.page, "login-error")
            raise

    def _session_markers_present(self, page: BrowserPage) -> bool:
        if page.query_all(DOM.SESSION.logged_in_marker):
            return True
        return any(path in page.current_url for path in DOM.SESSION.authenticated_paths)

    def is_logged_in(self) -> bool:
        """
        Best-effort check that the session is authenticated.

        True when the user menu is present or the URL is an authenticated path.
        Stale selectors can produce false negatives.
        """
        try:
            if self.waits.wait_until(
                self.page,
                self._session_markers_present,
                "logged in indicator",
                fixed_duration=0.0,
                timeout=self._default_timeout,
            ):
                logger.info(f"Logged in indicator found. Current URL: {self.page.current_url}")
                return True

            logger.warning(f"Could not verify login. Current URL: {self.page.current_url}")
            self.diagnostics.capture(self.page, "login-verification-failed")
            return False
        except WebDriverException as e:
            logger.error(f"Error checking login status: {e}")
            self.diagnostics.capture(self.page, "login-status-error")
            return False

    def _click_logout_link(self) -> bool:
        links = self.page.query_all(DOM.SESSION.logout_link)
        if not links:
            return False
        previous_url = self.page.current_url
        self.page.click(links[0])
        self.waits.wait_for_url_change(
            self.page, previous_url, fixed_duration=3.0, timeout=self._default_timeout
        )
        return True

    def logout(self) -> bool:
        """
        Log out via the direct logout link, or through the user menu.

        Logout is never fatal: failures are logged and screenshotted.

        Returns:
            True if a logout control was clicked.
        """
        logger.info("Logging out from WeWork...")
        try:
            if self._click_logout_link():
                logger.info("Clicked logout link")
                return True

            menus = self.page.query_all(DOM.SESSION.user_menu)
            if menus:
                self.page.click(menus[0])
                logger.info("Opened user menu")
                self.waits.wait_for_selector(
                    self.page, DOM.SESSION.logout_link, fixed_duration=1.0, timeout=self._default_timeout
                )
                if self._click_logout_link():
                    logger.info("Clicked logout option in user menu")
                    return True

            logger.warning("Could not find logout button or link")
            self.diagnostics.capture(self.page, "logout-failed")
            return False
        except WebDriverException as e:
            logger.error(f"Error during logout: {e}")
            self.diagnostics.capture(self.page, "logout-error")
            return False
