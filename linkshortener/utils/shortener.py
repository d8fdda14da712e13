"""Shortcode generation utility

This module provides helpers for deriving short, fixed-length Base62 codes
from an original URL, the owner's identifier and a nanosecond timestamp.

Functions:
    generate_shortcode(target, owner_id, length=6, timestamp_ns=None):
        Generate a short code suitable for use as a URL slug.

Classes:
    ShortcodeGenerator:
        Bind generate_shortcode() to a configured code length.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> code = generate_shortcode('https://example.com', owner_id)
    >>> len(code)
    6
"""

import hashlib
import string
import time
from typing import Optional
from uuid import UUID

from linkshortener.utils.constants import DEFAULT_SHORTCODE_LENGTH


ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)  # 10 digits + 26 uppercase + 26 lowercase


def generate_shortcode(
    target: str,
    owner_id: UUID | str,
    length: int = DEFAULT_SHORTCODE_LENGTH,
    timestamp_ns: Optional[int] = None,
) -> str:
    """Generate a fixed-length Base62 short code for a URL and its owner.

    The input `target + owner_id + timestamp_ns` is hashed with SHA-256. The
    first 8 bytes of the digest, read as an unsigned big-endian integer, are
    converted into Base62 digits, least significant digit first. When the
    integer runs out of digits before `length` characters are produced, the
    next value is taken from the digest byte at index `len(code) % 32`.

    Args:
        target (str):
            The original URL.

        owner_id (UUID | str):
            Identifier of the user creating the link. The same URL yields
            different codes for different users.

        length (int, optional):
            Exact length of the resulting code.
            Defaults to DEFAULT_SHORTCODE_LENGTH.

        timestamp_ns (int, optional):
            Salt value. Defaults to `time.time_ns()`, which makes consecutive
            calls produce different codes.

    Returns:
        str: A Base62 code of exactly `length` characters.

    Example:
        >>> code = generate_shortcode('https://example.com', 'user-1', length=8, timestamp_ns=42)
        >>> len(code)
        8

    NOTE:
        - Uniqueness is not guaranteed: two calls within the same nanosecond
          for the same URL and owner return the same code. Callers must
          check for collisions and retry.
        - The alphabet is Base62 safe: [0-9A-Za-z].
    """
    if not isinstance(target, str):
        raise TypeError(f'Target URL must be of type string (given type: {type(target)}).')
    if not isinstance(owner_id, (UUID, str)):
        raise TypeError(f'Owner ID must be of type UUID or string (given type: {type(owner_id)}).')
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    if timestamp_ns is None:
        timestamp_ns = time.time_ns()

    digest = hashlib.sha256(f'{target}{owner_id}{timestamp_ns}'.encode('utf-8')).digest()
    value = int.from_bytes(digest[:8], 'big')

    code = []
    while len(code) < length:
        code.append(ALPHABET[value % BASE])
        value //= BASE
        if value == 0:
            value = digest[len(code) % len(digest)]
    return ''.join(code)


class ShortcodeGenerator:
    """Generate short codes of a configured length

    Example:
        >>> generator = ShortcodeGenerator(length=7)
        >>> len(generator.generate('https://example.com', owner_id))
        7
    """

    def __init__(self, length: int = DEFAULT_SHORTCODE_LENGTH):
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
        if length <= 0:
            raise ValueError(f'Length must be a positive integer (given value: {length}).')
        self.length = length

    def generate(self, target: str, owner_id: UUID | str) -> str:
        return generate_shortcode(target, owner_id, length=self.length)
