"""URL validation helpers

A URL can be shortened when it is an absolute `http` or `https` URL with a
host and is well-formed per RFC 3986: only unreserved, reserved and
percent-encoded characters, valid percent escapes, a registered name or
IP literal as host, and a port within range.

Functions:
    is_valid_url(url) -> bool:
        True if the URL is a well-formed absolute http(s) URL with a host.
    validate_url(url) -> str:
        Return the URL unchanged or raise InvalidArgumentError.

Example:
    >>> is_valid_url('https://example.com/page?id=1')
    True
    >>> is_valid_url('ftp://example.com')
    False
    >>> is_valid_url('https://example.com/<script>')
    False
"""

import re
import ipaddress
import urllib.parse

from linkshortener.exceptions import InvalidArgumentError


ALLOWED_SCHEMES = frozenset({'http', 'https'})

# RFC 3986 unreserved + reserved characters, plus '%' for escapes
URI_CHARACTERS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")
BAD_PERCENT_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')
HOSTNAME = re.compile(r'[A-Za-z0-9.-]+')


def _is_valid_host(components: urllib.parse.ParseResult) -> bool:
    hostname = components.hostname
    if not hostname:
        return False

    # IP literal, e.g. http://[::1]:8080/
    if '[' in components.netloc:
        try:
            ipaddress.IPv6Address(hostname)
        except ValueError:
            return False
        return True

    return HOSTNAME.fullmatch(hostname) is not None


def is_valid_url(url: str) -> bool:
    if not isinstance(url, str) or not URI_CHARACTERS.fullmatch(url):
        return False
    if BAD_PERCENT_ESCAPE.search(url):
        return False

    try:
        components = urllib.parse.urlparse(url)
        # Accessing the port validates it (raises ValueError when out of range)
        components.port
    except ValueError:
        return False

    # urlparse() lowercases the scheme, the raw prefix must match exactly
    scheme = url.partition(':')[0]
    if scheme not in ALLOWED_SCHEMES or not _is_valid_host(components):
        return False

    # Square brackets are only allowed around an IP literal host
    remainder = url.partition(components.netloc)[2]
    return '[' not in remainder and ']' not in remainder


def validate_url(url: str) -> str:
    """Ensure a URL can be shortened

    Args:
        url (str):
            Candidate original URL.

    Returns:
        str: the same URL.

    Raises:
        InvalidArgumentError:
            If the URL is not a well-formed absolute URL with `http` or
            `https` scheme.
    """
    if not is_valid_url(url):
        raise InvalidArgumentError(f'Invalid URL: {url!r}')
    return url
