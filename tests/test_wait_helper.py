"""
Tests for the wait strategy helper module.

These tests verify the WaitMode enum, WaitStrategy class, and the
configurable wait behavior for page operations.
"""

from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import TimeoutException

from deskcheck.config import WaitMode
from deskcheck.providers.wait_helper import HYBRID_BUFFER_SECONDS, WaitStrategy
from tests.fixtures.fake_page import FakePage, booking_html, location_card


class TestWaitModeEnum:
    """Tests for the WaitMode enum."""

    def test_wait_mode_values(self) -> None:
        """Test that every mode has its string value."""
        assert WaitMode.FIXED.value == "fixed"
        assert WaitMode.EVENT_DRIVEN.value == "event_driven"
        assert WaitMode.HYBRID.value == "hybrid"

    def test_wait_mode_from_string(self) -> None:
        """Test that WaitMode can be created from string values."""
        assert WaitMode("fixed") == WaitMode.FIXED
        assert WaitMode("event_driven") == WaitMode.EVENT_DRIVEN
        assert WaitMode("hybrid") == WaitMode.HYBRID


@pytest.fixture
def page() -> FakePage:
    """A page showing one location card."""
    fake = FakePage()
    fake.load(booking_html(location_card("10 York Rd", "3 desks available")))
    return fake


class TestWaitForSelector:
    """Tests for WaitStrategy.wait_for_selector."""

    def test_event_driven_returns_true_when_present(self, page: FakePage) -> None:
        """Test that a present selector is reported without sleeping."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)

        with patch("deskcheck.providers.wait_helper.time_module.sleep") as mock_sleep:
            assert strategy.wait_for_selector(page, ".card-title", fixed_duration=2.0, timeout=1.0)
            mock_sleep.assert_not_called()

    def test_event_driven_returns_false_on_timeout(self, page: FakePage) -> None:
        """Test that a missing selector returns False instead of raising."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        assert not strategy.wait_for_selector(page, ".missing", fixed_duration=2.0, timeout=0)

    def test_fixed_mode_sleeps_for_duration(self, page: FakePage) -> None:
        """Test that FIXED mode sleeps for the fixed duration then checks once."""
        strategy = WaitStrategy(WaitMode.FIXED)

        with patch("deskcheck.providers.wait_helper.time_module.sleep") as mock_sleep:
            assert strategy.wait_for_selector(page, ".card-title", fixed_duration=2.0, timeout=30.0)
            mock_sleep.assert_called_once_with(2.0)

    def test_fixed_mode_reports_missing_selector(self, page: FakePage) -> None:
        """Test that FIXED mode still reports whether the condition holds."""
        strategy = WaitStrategy(WaitMode.FIXED)

        with patch("deskcheck.providers.wait_helper.time_module.sleep"):
            assert not strategy.wait_for_selector(page, ".missing", fixed_duration=2.0, timeout=30.0)

    def test_hybrid_mode_adds_buffer_sleep(self, page: FakePage) -> None:
        """Test that HYBRID mode adds buffer sleep after the condition wait."""
        strategy = WaitStrategy(WaitMode.HYBRID, poll_interval=0.001)

        with patch("deskcheck.providers.wait_helper.time_module.sleep") as mock_sleep:
            strategy.wait_for_selector(page, ".card-title", fixed_duration=2.0, timeout=1.0)
            mock_sleep.assert_called_once_with(HYBRID_BUFFER_SECONDS)


class TestWaitUntil:
    """Tests for WaitStrategy.wait_until."""

    def test_uses_webdriverwait_with_timeout_and_poll(self) -> None:
        """Test that the condition is polled through WebDriverWait."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.1)
        mock_page = MagicMock()
        condition = MagicMock(return_value=True)

        with patch("deskcheck.providers.wait_helper.WebDriverWait") as mock_wait_class:
            mock_wait = MagicMock()
            mock_wait_class.return_value = mock_wait

            result = strategy.wait_until(mock_page, condition, "thing", fixed_duration=1.0, timeout=7.5)

            mock_wait_class.assert_called_once_with(mock_page, 7.5, poll_frequency=0.1)
            mock_wait.until.assert_called_once_with(condition)
            assert result is True

    def test_timeout_exception_is_absorbed(self) -> None:
        """Test that a TimeoutException from WebDriverWait becomes False."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN)

        with patch("deskcheck.providers.wait_helper.WebDriverWait") as mock_wait_class:
            mock_wait_class.return_value.until.side_effect = TimeoutException()
            assert strategy.wait_until(MagicMock(), lambda p: False, "thing", 1.0, 5.0) is False

    def test_condition_becomes_true_while_polling(self) -> None:
        """Test that a condition satisfied on a later poll is reported."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        answers = iter([False, False, True])

        assert strategy.wait_until(MagicMock(), lambda p: next(answers), "thing", 1.0, 5.0)


class TestWaitForTextAndNavigation:
    """Tests for the text and URL change waits."""

    def test_wait_for_text_present(self, page: FakePage) -> None:
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        assert strategy.wait_for_text(page, "10 York Rd", fixed_duration=0.0, timeout=0)

    def test_wait_for_text_absent(self, page: FakePage) -> None:
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        assert not strategy.wait_for_text(page, "30 Stamford St", fixed_duration=0.0, timeout=0)

    def test_wait_for_url_change(self) -> None:
        """Test that navigation is detected by comparing URLs."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        fake = FakePage()
        fake.goto("https://members.wework.com/a")

        assert not strategy.wait_for_url_change(fake, fake.current_url, 0.0, timeout=0)
        assert strategy.wait_for_url_change(fake, "https://members.wework.com/b", 0.0, timeout=0)


class TestWaitForRefresh:
    """Tests for WaitStrategy.wait_for_refresh."""

    def test_detached_element_counts_as_refresh(self, page: FakePage) -> None:
        """Test that replacing the rendered view is detected even when the text is equal."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        card = page.query_all(".card-title")[0]
        before = page.body_text()

        page.load(booking_html(location_card("10 York Rd", "3 desks available")))

        assert strategy.wait_for_refresh(page, card, before, fixed_duration=0.0, timeout=0)

    def test_changed_text_counts_as_refresh(self, page: FakePage) -> None:
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        before = page.body_text()

        page.load(booking_html(location_card("10 York Rd", "1 desk available")))

        assert strategy.wait_for_refresh(page, None, before, fixed_duration=0.0, timeout=0)

    def test_unchanged_view_times_out(self, page: FakePage) -> None:
        """Test that the previous view on screen is never mistaken for the new one."""
        strategy = WaitStrategy(WaitMode.EVENT_DRIVEN, poll_interval=0.001)
        card = page.query_all(".card-title")[0]

        assert not strategy.wait_for_refresh(
            page, card, page.body_text(), fixed_duration=0.0, timeout=0
        )

    def test_fixed_mode_sleeps_then_checks(self, page: FakePage) -> None:
        strategy = WaitStrategy(WaitMode.FIXED)
        card = page.query_all(".card-title")[0]
        with patch("deskcheck.providers.wait_helper.time_module.sleep") as mock_sleep:
            result = strategy.wait_for_refresh(page, card, page.body_text(), 1.0, timeout=30.0)
        mock_sleep.assert_called_once_with(1.0)
        assert result is False
