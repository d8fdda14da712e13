"""Abstract base class for user data access objects (DAOs).

This interface defines the contract for storing and looking up users
across different storage systems.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.memory import UserMemoryDAO
        >>> from linkshortener.models import UserModel
        >>> dao = UserMemoryDAO()

        >>> user = UserModel.create()
        >>> dao.insert(user).exists(user.user_id)
        True
"""

from abc import ABC, abstractmethod
from uuid import UUID

from linkshortener.models import UserModel


class UserBaseDAO(ABC):
    """Interface for user data access objects (DAOs)

    Methods:
        insert(user: UserModel, **kwargs) -> UserBaseDAO:
            Insert a new user.
            Raises UserAlreadyExistsError if the user id is taken.

        get(user_id: UUID, **kwargs) -> UserModel | None:
            Retrieve a user by id. Returns None if not found.

        exists(user_id: UUID, **kwargs) -> bool:
            Check whether a user exists.

        count(**kwargs) -> int:
            Return the number of stored users.

        all(**kwargs) -> list[UserModel]:
            Return a snapshot of every stored user.

    NOTE:
        - Users are never deleted, so there is no delete operation.
    """

    @abstractmethod
    def insert(self, user: UserModel, **kwargs) -> 'UserBaseDAO':
        """Insert a new user into the data store.

        Args:
            user (UserModel):
                The user to store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UserBaseDAO: self (for method chaining)

        Raises:
            UserAlreadyExistsError:
                If a user with the same id already exists.
        """
        pass

    @abstractmethod
    def get(self, user_id: UUID, **kwargs) -> UserModel | None:
        pass

    @abstractmethod
    def exists(self, user_id: UUID, **kwargs) -> bool:
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        pass

    @abstractmethod
    def all(self, **kwargs) -> list[UserModel]:
        pass
