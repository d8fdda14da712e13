import functools
from typing import TypeVar, Any
from collections.abc import Callable


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def synchronized(argument: str) -> Callable[[F], F]:
    """Serialize DAO method calls on the same key

    The lock is picked from the DAO's `locks` stripes (see StripedLockMixin)
    using the method's first positional argument, or the keyword argument
    named `argument` when the key is passed by name.

    Args:
        argument (str):
            Name of the method parameter holding the key.

    Returns:
        Callable[[F], F]:
            Decorator wrapping the method in the key's lock.

    Example:
        >>> @synchronized('shortcode')
        ... def get(self, shortcode):
        ...     return self._links.get(shortcode)
    """

    def decorator(method: F) -> F:
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            key = args[0] if args else kwargs[argument]
            with self.locks[key]:
                return method(self, *args, **kwargs)

        return wrapper

    return decorator
