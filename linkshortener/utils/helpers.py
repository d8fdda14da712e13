"""Helper utilities shared by the services and the console.

Functions:
    utc_now() -> datetime
        Current time as a timezone-aware UTC datetime
    get_short_url(shortcode, domain) -> str
        Get string representation of short URL for a given shortcode
    format_click_limit(click_limit) -> str
        Render a click limit, using '∞' for unlimited links

Example:
    >>> get_short_url('aB3xY9', 'short.ly')
    'short.ly/aB3xY9'
    >>> format_click_limit(-1)
    '∞'
"""

from datetime import datetime, UTC

from linkshortener.utils.constants import UNLIMITED_CLICKS


def utc_now() -> datetime:
    return datetime.now(UTC)


def get_short_url(shortcode: str, domain: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        domain (str): public shortener domain, optionally with a scheme

    Returns:
        str: short url string representation
    """
    return f'{domain.rstrip("/")}/{shortcode}'


def format_click_limit(click_limit: int) -> str:
    return '∞' if click_limit == UNLIMITED_CLICKS else str(click_limit)
