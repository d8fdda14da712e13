"""Data Access Object (DAO) implementation for managing shortened URLs in memory

This module provides a thread-safe, process-local implementation of
ShortURLBaseDAO for CRUD-like operations with ShortURLModel instances.

Responsibilities:
    - Insert, retrieve and delete short URLs;
    - Maintain the owner -> short codes index in step with the primary map;
    - Record link hits atomically against the click quota and TTL;
    - Raise appropriate DAO exceptions.

Classes:
    ShortURLMemoryDAO:
        DAO for storing and retrieving ShortURLModel in process memory.

Example:
    >>> from linkshortener.dao.memory import ShortURLMemoryDAO

    >>> dao = ShortURLMemoryDAO()
    >>> dao.insert(short_url)
    <ShortURLMemoryDAO>

    >>> dao.get("abc123").target
    'https://example.com/page'

    >>> dao.hit("abc123").click_count
    1

    >>> [link.shortcode for link in dao.by_owner(short_url.owner_id)]
    ['abc123']
"""

from dataclasses import replace
from datetime import datetime
from typing import Optional
from uuid import UUID

from beartype import beartype

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.memory.mixins import LockStripes, StripedLockMixin
from linkshortener.dao.memory.helpers import synchronized
from linkshortener.dao.exceptions import (
    ClickLimitReachedError,
    ShortURLAlreadyExistsError,
    ShortURLExpiredError,
    ShortURLNotFoundError,
)
from linkshortener.utils.constants import LOCK_STRIPES


class ShortURLMemoryDAO(StripedLockMixin, ShortURLBaseDAO):
    """In-memory Data Access Object (DAO) for managing short URL mappings

    Two dictionaries hold the state: short code -> ShortURLModel, and
    owner id -> set of short codes. Every mutation of a short code happens
    under that code's stripe lock; mutations that touch the owner index also
    hold the owner's stripe lock, so readers of the index never observe one
    dictionary without the other. Locks are always taken in the order
    code -> owner.

    Attributes (see StripedLockMixin):
        locks (LockStripes):
            Locks guarding short codes.
        owner_locks (LockStripes):
            Locks guarding the owner index.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLMemoryDAO:
            Store a short URL and index it by owner.
            Raises ShortURLAlreadyExistsError when a URL with the same shortcode exists.

        get(shortcode: str, **kwargs) -> ShortURLModel | None:
            Retrieve a short URL snapshot by shortcode.

        delete(shortcode: str, **kwargs) -> ShortURLModel | None:
            Remove a short URL and its owner index entry.

        hit(shortcode: str, now: datetime | None = None, **kwargs) -> ShortURLModel:
            Check TTL and quota, then increment the click counter.
            Raises ShortURLNotFoundError, ShortURLExpiredError or ClickLimitReachedError.

        update_click_limit(shortcode: str, click_limit: int, **kwargs) -> ShortURLModel:
            Replace the click limit of a short URL.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
    """

    def __init__(self, stripes: int = LOCK_STRIPES):
        super().__init__(stripes=stripes)
        self.owner_locks = LockStripes(stripes)
        self._links: dict[str, ShortURLModel] = {}
        self._codes_by_owner: dict[UUID, set[str]] = {}

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}>'

    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLMemoryDAO':
        """Insert a short URL mapping

        The existence check, the primary map insert and the owner index
        update form one critical section.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLMemoryDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
        """
        shortcode = short_url.shortcode
        with self.locks[shortcode], self.owner_locks[short_url.owner_id]:
            if shortcode in self._links:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")
            self._links[shortcode] = short_url
            self._codes_by_owner.setdefault(short_url.owner_id, set()).add(shortcode)
        return self

    @synchronized('shortcode')
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        return self._links.get(shortcode)

    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return shortcode in self._links

    @synchronized('shortcode')
    @beartype
    def delete(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        """Remove a short URL mapping together with its owner index entry

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel | None:
                The removed snapshot, None if the shortcode was not stored.
        """
        short_url = self._links.get(shortcode)
        if short_url is None:
            return None

        with self.owner_locks[short_url.owner_id]:
            del self._links[shortcode]
            codes = self._codes_by_owner.get(short_url.owner_id)
            if codes is not None:
                codes.discard(shortcode)
                if not codes:
                    del self._codes_by_owner[short_url.owner_id]
        return short_url

    @beartype
    def by_owner(self, owner_id: UUID, **kwargs) -> list[ShortURLModel]:
        with self.owner_locks[owner_id]:
            codes = tuple(self._codes_by_owner.get(owner_id, ()))
            return [self._links[shortcode] for shortcode in codes]

    @synchronized('shortcode')
    @beartype
    def hit(self, shortcode: str, now: Optional[datetime] = None, **kwargs) -> ShortURLModel:
        """Record one access of a short URL

        NOTE: the checks and the increment run under the shortcode's lock, so
              with N clicks left exactly N concurrent hits succeed. Rejected
              hits leave the stored snapshot untouched.

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            now (datetime | None):
                Reference time for the expiry check (current UTC time by default).
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                Snapshot after the increment.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given short code exists.
            ShortURLExpiredError:
                If the short URL is past its expiry time.
            ClickLimitReachedError:
                If the click limit is already reached.

        Example:
            >>> dao.hit('abc123').click_count
            1
        """
        short_url = self._links.get(shortcode)
        if short_url is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        if short_url.is_expired(now):
            raise ShortURLExpiredError(f"Short URL with code '{shortcode}' has expired.", short_url)
        if short_url.has_reached_click_limit():
            raise ClickLimitReachedError(f"Short URL with code '{shortcode}' reached its click limit.", short_url)

        short_url = replace(short_url, click_count=short_url.click_count + 1)
        self._links[shortcode] = short_url
        return short_url

    @synchronized('shortcode')
    @beartype
    def update_click_limit(self, shortcode: str, click_limit: int, **kwargs) -> ShortURLModel:
        short_url = self._links.get(shortcode)
        if short_url is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        short_url = replace(short_url, click_limit=click_limit)
        self._links[shortcode] = short_url
        return short_url

    def count(self, **kwargs) -> int:
        return len(self._links)

    def all(self, **kwargs) -> list[ShortURLModel]:
        return list(self._links.copy().values())
