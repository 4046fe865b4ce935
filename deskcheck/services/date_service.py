from collections.abc import Sequence
from datetime import date, timedelta

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def next_weekday(today: date, weekday: int) -> date:
    """
    Next occurrence of ``weekday`` (Monday=0) strictly after ``today``.

    If today already is that weekday, the date a week ahead is returned.
    """
    days_ahead = (weekday - today.weekday()) % 7
    return today + timedelta(days=days_ahead or 7)


def next_target_dates(today: date, weekdays: Sequence[int]) -> list[date]:
    """Next occurrence of each weekday, in the order the weekdays are given."""
    return [next_weekday(today, weekday) for weekday in weekdays]


def format_input_date(target_date: date) -> str:
    """Format a date the way the booking calendar input expects, e.g. "Mar 16, 2025"."""
    return f"{MONTH_ABBREVIATIONS[target_date.month - 1]} {target_date.day}, {target_date.year}"


def format_display_date(target_date: date) -> str:
    """Long human readable form, e.g. "March 16, 2025"."""
    return f"{MONTH_NAMES[target_date.month - 1]} {target_date.day}, {target_date.year}"
