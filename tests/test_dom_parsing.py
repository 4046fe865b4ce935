"""
DOM Parsing Tests using captured HTML fixtures.

These tests validate that the selectors in wework_dom_schema match the
member portal markup, without needing live access.
"""

import pytest
from bs4 import BeautifulSoup

from deskcheck.providers.wework_dom_schema import DOM
from tests.fixtures.fake_page import XPATH_EQUIVALENTS, load_fixture


@pytest.fixture
def login_page_html() -> BeautifulSoup:
    """Load the login page HTML fixture."""
    return BeautifulSoup(load_fixture("login_page.html"), "html.parser")


@pytest.fixture
def dashboard_page_html() -> BeautifulSoup:
    return BeautifulSoup(load_fixture("dashboard_page.html"), "html.parser")


@pytest.fixture
def booking_page_html() -> BeautifulSoup:
    """Load the desk booking page HTML fixture."""
    return BeautifulSoup(load_fixture("booking_page.html"), "html.parser")


class TestLoginPageSelectors:
    """Tests for login page DOM selectors."""

    def test_member_login_button(self, login_page_html: BeautifulSoup):
        elements = login_page_html.select(DOM.LOGIN.member_login_button)
        assert len(elements) == 1
        assert elements[0].get_text(strip=True) == "Member log in"

    def test_credential_inputs(self, login_page_html: BeautifulSoup):
        assert len(login_page_html.select(DOM.LOGIN.email_input)) == 1
        assert len(login_page_html.select(DOM.LOGIN.password_input)) == 1

    def test_submit_button_is_not_member_button(self, login_page_html: BeautifulSoup):
        """The submit selector must not match the welcome screen button."""
        elements = login_page_html.select(DOM.LOGIN.submit_button)
        assert len(elements) == 1
        assert elements[0].get_text(strip=True) == "Log in"


class TestSessionSelectors:
    """Tests for session marker and logout selectors."""

    def test_logged_in_marker(self, dashboard_page_html: BeautifulSoup):
        assert dashboard_page_html.select(DOM.SESSION.logged_in_marker)

    def test_logged_in_marker_absent_on_login_page(self, login_page_html: BeautifulSoup):
        assert login_page_html.select(DOM.SESSION.logged_in_marker) == []

    def test_logout_link(self, dashboard_page_html: BeautifulSoup):
        links = XPATH_EQUIVALENTS[DOM.SESSION.logout_link](dashboard_page_html)
        assert [link.get_text(strip=True) for link in links] == ["Logout"]

    def test_logout_link_is_xpath(self):
        assert DOM.SESSION.logout_link.startswith("xpath=")


class TestBookingPageSelectors:
    """Tests for booking page DOM selectors."""

    def test_date_input(self, booking_page_html: BeautifulSoup):
        elements = booking_page_html.select(DOM.BOOKING.date_input)
        assert len(elements) == 1
        assert elements[0].get("value") == "Mar 14, 2025"

    def test_location_card_titles(self, booking_page_html: BeautifulSoup):
        titles = [
            card.get_text(strip=True)
            for card in booking_page_html.select(DOM.BOOKING.location_card_title)
        ]
        assert titles == ["10 York Rd", "30 Stamford St"]

    def test_availability_text_shares_container_with_title(
        self, booking_page_html: BeautifulSoup
    ):
        """Each card title and its availability line live in the same container."""
        containers = booking_page_html.select(DOM.BOOKING.location_card_container)
        assert len(containers) == 2
        texts = [
            container.select_one(DOM.BOOKING.availability_text).get_text(strip=True)
            for container in containers
        ]
        assert texts == ["3 desks available", "12 desks available"]
