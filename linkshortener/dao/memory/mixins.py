"""Lock striping mixin shared by the in-memory DAOs.

Responsibilities:
    - Provide a fixed pool of locks selected by key hash
    - Serialize operations on the same key without a global lock

Classes:
    - LockStripes: Fixed-size pool of threading locks addressed by key.
    - StripedLockMixin: Base mixin to inject a LockStripes pool into a DAO.

Example:
    Typical usage with a DAO implementation:

        >>> class UserMemoryDAO(StripedLockMixin, UserBaseDAO):
        ...     pass
        ...
        >>> dao = UserMemoryDAO(stripes=16)
        >>> with dao.locks[user_id]:
        ...     ...
"""

import threading
from collections.abc import Hashable

from linkshortener.utils.constants import LOCK_STRIPES


class LockStripes:
    """Fixed-size pool of locks addressed by hashable keys

    Equal keys always map to the same lock. Distinct keys may share a lock,
    which only costs some contention.
    """

    def __init__(self, size: int = LOCK_STRIPES):
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError(f'Lock stripe count must be of type integer (given type: {type(size)}).')
        if size <= 0:
            raise ValueError(f'Lock stripe count must be a positive integer (given value: {size}).')

        self._locks = tuple(threading.Lock() for _ in range(size))

    def __getitem__(self, key: Hashable) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]

    def __len__(self) -> int:
        return len(self._locks)


class StripedLockMixin:
    """Mixin lock striping setup for in-memory DAOs.

    Attributes:
        locks (LockStripes):
            Locks guarding the DAO's primary keys.
    """

    def __init__(self, stripes: int = LOCK_STRIPES):
        """Initialize the lock pool

        Args:
            stripes (int):
                Number of locks in the pool. Defaults to LOCK_STRIPES.

        Raises:
            TypeError / ValueError:
                If stripes is not a positive integer.
        """
        self.stripes = stripes
        self.locks = LockStripes(stripes)
