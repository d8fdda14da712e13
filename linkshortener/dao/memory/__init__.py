from linkshortener.dao.memory.mixins import LockStripes, StripedLockMixin
from linkshortener.dao.memory.short_url_memory_dao import ShortURLMemoryDAO
from linkshortener.dao.memory.user_memory_dao import UserMemoryDAO


__all__ = [
    'LockStripes',
    'StripedLockMixin',
    'ShortURLMemoryDAO',
    'UserMemoryDAO',
]
