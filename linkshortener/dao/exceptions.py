"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel that already exists.

    ShortURLExpiredError:
        Raised when a hit is recorded against an expired ShortURLModel.

    ClickLimitReachedError:
        Raised when a hit is recorded against a ShortURLModel whose click quota is used up.

    UserAlreadyExistsError:
        Raised when attempting to insert a UserModel that already exists.

Example:
    >>> from linkshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""

from linkshortener.models import ShortURLModel


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortURLModel that already exists in the data store."""

    pass


class ShortURLUnavailableError(DAOError):
    """Base class for hits rejected because the link is no longer accessible.

    Attributes:
        short_url (ShortURLModel):
            Snapshot of the link at the moment the hit was rejected.
    """

    def __init__(self, message: str, short_url: ShortURLModel):
        super().__init__(message)
        self.short_url = short_url


class ShortURLExpiredError(ShortURLUnavailableError):
    """Exception raised when a hit is recorded against an expired short URL."""

    pass


class ClickLimitReachedError(ShortURLUnavailableError):
    """Exception raised when a hit is recorded against a short URL with no clicks left."""

    pass


class UserAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a UserModel that already exists in the data store."""

    pass
