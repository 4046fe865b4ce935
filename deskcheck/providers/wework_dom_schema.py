"""
Centralized DOM schema for the WeWork member portal.

Every CSS selector, XPath expression and URL marker used by the login and
desk booking flows is defined here, grouped by page. When the portal changes
its markup, update selectors ONLY in this file.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoginSelectors:
    """Selectors for the member login flow."""

    member_login_button: str = "button.btn-login"
    email_input: str = 'input[type="email"]'
    password_input: str = 'input[type="password"]'
    submit_button: str = 'button[type="submit"]'


@dataclass(frozen=True)
class SessionSelectors:
    """Markers of an authenticated session and the logout controls."""

    logged_in_marker: str = ".user-menu"
    # URL path fragments only reachable once signed in
    authenticated_paths: tuple[str, ...] = (
        "/dashboard",
        "/account",
        "/profile",
        "/workspace",
    )
    user_menu: str = ".user-menu"
    logout_link: str = (
        "xpath=//a[contains(normalize-space(.), 'Logout') "
        "or contains(normalize-space(.), 'Log out')]"
    )


@dataclass(frozen=True)
class BookingSelectors:
    """Selectors for the desk booking calendar and location cards."""

    date_input: str = "yardi-control-date input.form-control"
    location_card_title: str = ".card-title"
    # Layout container shared by a card title and its availability line
    location_card_container: str = ".d-flex.flex-column"
    availability_text: str = ".text-primary div[translate]"


@dataclass(frozen=True)
class WeWorkDOMSchema:
    """Top-level container grouping all selector categories."""

    LOGIN: LoginSelectors = LoginSelectors()
    SESSION: SessionSelectors = SessionSelectors()
    BOOKING: BookingSelectors = BookingSelectors()


# Single import point: `from deskcheck.providers.wework_dom_schema import DOM`
DOM = WeWorkDOMSchema()
