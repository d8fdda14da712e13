from dataclasses import dataclass, field
from datetime import datetime, UTC
from uuid import UUID, uuid4


@dataclass(frozen=True)
class UserModel:
    """Represent a user who owns short URLs.

    Users are identified solely by an opaque 128-bit identifier and are
    never modified after creation.

    Attributes:
        user_id (UUID):
            Opaque identifier, also the user's only credential.
        created_at (datetime):
            Creation time (UTC).

    Example:
        >>> user = UserModel.create()
        >>> user.user_id.version
        4
    """

    user_id: UUID
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls) -> 'UserModel':
        return cls(user_id=uuid4())
