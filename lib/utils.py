# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date
from pathlib import PureWindowsPath
from uuid import uuid4

from core.models.user import DATE_CREATED_FORMAT


def new_user_id() -> str:
    """Generate a random UUID4 string for a new user."""
    return str(uuid4())


def format_date_created(value: date | None = None) -> str:
    """
    Format a calendar date the way users.date_created stores it.

    Args:
        value: Date to format (defaults to today)

    Returns:
        Date string in MM-DD-YYYY form

    Example:
        format_date_created(date(2026, 10, 19))  # "10-19-2026"
    """
    return (value or date.today()).strftime(DATE_CREATED_FORMAT)


def base_filename(filename: str | None) -> str:
    """
    Return the last path component of a client-supplied file name.

    Browsers may send "C:\\fakepath\\avatar.png" or "photos/avatar.png";
    both become "avatar.png". PureWindowsPath splits on both separators.
    """
    if not filename:
        return ""
    return PureWindowsPath(filename.strip()).name
