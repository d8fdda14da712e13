from uuid import UUID

from beartype import beartype

from linkshortener.models import UserModel
from linkshortener.dao.base import UserBaseDAO
from linkshortener.dao.memory.mixins import StripedLockMixin
from linkshortener.dao.memory.helpers import synchronized
from linkshortener.dao.exceptions import UserAlreadyExistsError
from linkshortener.utils.constants import LOCK_STRIPES


class UserMemoryDAO(StripedLockMixin, UserBaseDAO):
    def __init__(self, stripes: int = LOCK_STRIPES):
        super().__init__(stripes=stripes)
        self._users: dict[UUID, UserModel] = {}

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}>'

    @beartype
    def insert(self, user: UserModel, **kwargs) -> 'UserMemoryDAO':
        with self.locks[user.user_id]:
            if user.user_id in self._users:
                raise UserAlreadyExistsError(f"User with ID '{user.user_id}' already exists.")
            self._users[user.user_id] = user
        return self

    @synchronized('user_id')
    @beartype
    def get(self, user_id: UUID, **kwargs) -> UserModel | None:
        return self._users.get(user_id)

    @beartype
    def exists(self, user_id: UUID, **kwargs) -> bool:
        return user_id in self._users

    def count(self, **kwargs) -> int:
        return len(self._users)

    def all(self, **kwargs) -> list[UserModel]:
        return list(self._users.copy().values())
