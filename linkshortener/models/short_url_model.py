from dataclasses import dataclass
from datetime import datetime, UTC
from enum import StrEnum
from typing import Optional
from uuid import UUID

from linkshortener.utils.constants import UNLIMITED_CLICKS


class LinkStatus(StrEnum):
    ACTIVE = 'active'
    EXPIRED = 'expired'
    QUOTA_EXHAUSTED = 'quota_exhausted'


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Instances are immutable snapshots. Data stores replace the stored snapshot
    whenever the click counter or the click limit changes.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        owner_id (UUID):
            Identifier of the user who created the link. Only the owner may
            change or delete it.
        created_at (datetime):
            Creation time (UTC).
        expires_at (datetime):
            Time-To-Live(TTL) as Python datetime, after which the short URL
            is no longer accessible and gets removed by the cleanup sweep.
        click_limit (int):
            Maximum number of successful accesses, -1 means unlimited.
        click_count (int):
            Number of successful accesses so far.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> from uuid import uuid4
        >>> now = datetime.now(UTC)
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="abc123",
        ...     owner_id=uuid4(),
        ...     created_at=now,
        ...     expires_at=now + timedelta(days=1),
        ...     click_limit=2,
        ... )
        >>> url.click_count
        0
        >>> url.is_accessible()
        True
    """

    target: str
    shortcode: str
    owner_id: UUID
    created_at: datetime
    expires_at: datetime
    click_limit: int = UNLIMITED_CLICKS
    click_count: int = 0

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(UTC)
        return now > self.expires_at

    def has_reached_click_limit(self) -> bool:
        return self.click_limit != UNLIMITED_CLICKS and self.click_count >= self.click_limit

    def is_accessible(self, now: Optional[datetime] = None) -> bool:
        return not self.is_expired(now) and not self.has_reached_click_limit()

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.owner_id == user_id

    def status(self, now: Optional[datetime] = None) -> LinkStatus:
        """Derive the lifecycle state of the link

        Expiry takes precedence over quota exhaustion since it is irreversible.
        """
        if self.is_expired(now):
            return LinkStatus.EXPIRED
        if self.has_reached_click_limit():
            return LinkStatus.QUOTA_EXHAUSTED
        return LinkStatus.ACTIVE

    @property
    def unlimited(self) -> bool:
        return self.click_limit == UNLIMITED_CLICKS
