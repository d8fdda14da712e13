"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism.

Responsibilities:
    - Provide an interface for inserting, retrieving and deleting ShortURLModel objects.
    - Provide owner-indexed lookup of ShortURLModel objects.
    - Provide atomic click accounting and click limit updates.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.memory import ShortURLMemoryDAO

        >>> dao = ShortURLMemoryDAO()
        >>> dao.insert(short_url)
        <ShortURLMemoryDAO>

        >>> dao.get("a1b2c3").target
        'https://example.com/blog/article-123'

        >>> dao.hit("a1b2c3").click_count
        1
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from linkshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert a new ShortURLModel into the data store.
            Raises ShortURLAlreadyExistsError if the short code already exists.

        get(shortcode: str, **kwargs) -> ShortURLModel | None:
            Retrieve a ShortURLModel by short code. Returns None if not found.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a short code is in use.

        delete(shortcode: str, **kwargs) -> ShortURLModel | None:
            Remove a ShortURLModel. Returns the removed model, None if absent.

        by_owner(owner_id: UUID, **kwargs) -> list[ShortURLModel]:
            Retrieve all ShortURLModel objects created by a user.

        hit(shortcode: str, now: datetime | None, **kwargs) -> ShortURLModel:
            Atomically check accessibility and increment the click counter.
            Raises ShortURLNotFoundError, ShortURLExpiredError or ClickLimitReachedError.

        update_click_limit(shortcode: str, click_limit: int, **kwargs) -> ShortURLModel:
            Replace the click limit of a ShortURLModel.
            Raises ShortURLNotFoundError if the entry does not exist.

        count(**kwargs) -> int:
            Return the number of stored short URLs.

        all(**kwargs) -> list[ShortURLModel]:
            Return a snapshot of every stored short URL.

    Subclassing:
        Datastore-specific implementations must extend this class and
        implement all abstract methods.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same short code already exists
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        """Retrieve a ShortURLModel from the data store by its short code.

        Args:
            shortcode (str):
                The short code of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel | None: The ShortURLModel instance if found, otherwise None.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        pass

    @abstractmethod
    def delete(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        """Remove a ShortURLModel and its owner index entry.

        Args:
            shortcode (str):
                The short code of the ShortURLModel to be removed.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel | None: The removed ShortURLModel, None if nothing was stored.
        """
        pass

    @abstractmethod
    def by_owner(self, owner_id: UUID, **kwargs) -> list[ShortURLModel]:
        pass

    @abstractmethod
    def hit(self, shortcode: str, now: Optional[datetime] = None, **kwargs) -> ShortURLModel:
        """Record a successful access of a short URL.

        The accessibility check and the click counter increment form a single
        atomic step: concurrent hits never push the click count above the limit.

        Args:
            shortcode (str):
                The short code of the accessed ShortURLModel.

            now (datetime | None):
                Reference time for the expiry check. Defaults to the current UTC time.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: the updated ShortURLModel snapshot.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given short code exists.

            ShortURLExpiredError:
                If the short URL has expired (click counter left unchanged).

            ClickLimitReachedError:
                If the click limit is reached (click counter left unchanged).
        """
        pass

    @abstractmethod
    def update_click_limit(self, shortcode: str, click_limit: int, **kwargs) -> ShortURLModel:
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        pass

    @abstractmethod
    def all(self, **kwargs) -> list[ShortURLModel]:
        pass
