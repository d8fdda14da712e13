"""Link lifecycle management

LinkService is the only entry point front ends use to work with users and
short URLs. It validates input, enforces ownership, generates unique short
codes and delegates storage to the DAOs.

Link states:
    active          -> accessible (not expired, clicks left)
    quota_exhausted -> click limit reached; the owner may raise the limit,
                       which makes the link active again
    expired         -> past its TTL; irreversible
    (deleted)       -> removed by the owner, or by cleanup_expired() once expired

Quota-exhausted links are never removed by cleanup_expired(); they stay
inspectable until they expire or their owner deletes them.

Example:
    >>> service = LinkService(
    ...     users=UserMemoryDAO(),
    ...     short_urls=ShortURLMemoryDAO(),
    ...     generator=ShortcodeGenerator(length=6),
    ...     notifications=NullNotificationSink(),
    ...     config=AppConfig(),
    ... )
    >>> user_id = service.create_user()
    >>> short_url = service.create_short_url('https://example.com', user_id, click_limit=2)
    >>> service.access(short_url.shortcode)
    'https://example.com'
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
from uuid import UUID, uuid4

from linkshortener.models import ShortURLModel, UserModel
from linkshortener.dao.base import ShortURLBaseDAO, UserBaseDAO
from linkshortener.dao.exceptions import (
    ClickLimitReachedError,
    ShortURLAlreadyExistsError,
    ShortURLExpiredError,
    ShortURLNotFoundError,
)
from linkshortener.exceptions import ExhaustedRetriesError, ForbiddenError, InvalidArgumentError, NotFoundError
from linkshortener.services.notifications import NotificationSink
from linkshortener.types import Clock
from linkshortener.utils.config import AppConfig
from linkshortener.utils.constants import MAX_SHORTCODE_ATTEMPTS, UNLIMITED_CLICKS
from linkshortener.utils.helpers import utc_now
from linkshortener.utils.shortener import ShortcodeGenerator
from linkshortener.utils.validation import validate_url


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Statistics:
    user_count: int
    link_count: int


def _validate_click_limit(click_limit: int) -> int:
    if isinstance(click_limit, bool) or not isinstance(click_limit, int):
        raise InvalidArgumentError(f'Click limit must be an integer (given type: {type(click_limit).__name__}).')
    if click_limit < 0 and click_limit != UNLIMITED_CLICKS:
        raise InvalidArgumentError(f'Click limit must be a non-negative number or {UNLIMITED_CLICKS} for unlimited.')
    return click_limit


class LinkService:
    """Create, access, modify and expire short URLs

    Args:
        users (UserBaseDAO):
            User store.
        short_urls (ShortURLBaseDAO):
            Short URL store.
        generator (ShortcodeGenerator):
            Short code generator (its length is the configured code length).
        notifications (NotificationSink):
            Receives expiry and quota exhaustion events.
        config (AppConfig):
            TTL and default click limit source.
        clock (Clock, optional):
            Source of the current time. Defaults to utc_now().
    """

    def __init__(
        self,
        users: UserBaseDAO,
        short_urls: ShortURLBaseDAO,
        generator: ShortcodeGenerator,
        notifications: NotificationSink,
        config: AppConfig,
        clock: Clock = utc_now,
    ):
        self.users = users
        self.short_urls = short_urls
        self.generator = generator
        self.notifications = notifications
        self.config = config
        self.clock = clock

    # -------------------------------
    # Users
    # -------------------------------

    def create_user(self) -> UUID:
        user = UserModel(user_id=uuid4(), created_at=self.clock())
        self.users.insert(user)
        logger.info('Created new user.', extra={'userId': str(user.user_id)})
        return user.user_id

    def user_exists(self, user_id: UUID) -> bool:
        return self.users.exists(user_id)

    # -------------------------------
    # Short URLs
    # -------------------------------

    def create_short_url(self, target: str, owner_id: UUID, click_limit: Optional[int] = None) -> ShortURLModel:
        """Shorten a URL on behalf of a user

        This method follows this procedure:
        - Step 1: Validate the URL (absolute, http or https)
        - Step 2: Check that the owner exists
        - Step 3: Generate a short code, retrying on collisions
        - Step 4: Compute expiry and click limit
        - Step 5: Store the new short URL

        Args:
            target (str):
                Original URL.
            owner_id (UUID):
                Identifier of the creating user.
            click_limit (int | None):
                Custom click quota (-1 for unlimited). Defaults to the configured limit.

        Returns:
            ShortURLModel: the stored short URL.

        Raises:
            InvalidArgumentError:
                Malformed URL, unknown owner or invalid click limit.
            ExhaustedRetriesError:
                No unique short code after MAX_SHORTCODE_ATTEMPTS attempts.
        """
        validate_url(target)
        if not isinstance(owner_id, UUID) or not self.users.exists(owner_id):
            raise InvalidArgumentError(f'User does not exist: {owner_id}')
        click_limit = self.config.default_click_limit if click_limit is None else _validate_click_limit(click_limit)

        for attempt in range(1, MAX_SHORTCODE_ATTEMPTS + 1):
            shortcode = self.generator.generate(target, owner_id)
            if self.short_urls.exists(shortcode):
                logger.debug('Short code collision.', extra={'shortcode': shortcode, 'attempt': attempt})
                continue

            now = self.clock()
            short_url = ShortURLModel(
                target=target,
                shortcode=shortcode,
                owner_id=owner_id,
                created_at=now,
                expires_at=now + timedelta(seconds=self.config.link_ttl_seconds),
                click_limit=click_limit,
            )
            try:
                self.short_urls.insert(short_url)
            except ShortURLAlreadyExistsError:
                # Another thread took the code between exists() and insert()
                logger.debug('Short code collision.', extra={'shortcode': shortcode, 'attempt': attempt})
                continue

            logger.info(
                'Created short URL.',
                extra={'shortcode': shortcode, 'target': target, 'userId': str(owner_id), 'clickLimit': click_limit},
            )
            return short_url

        logger.error('Failed to generate a unique short code.', extra={'target': target, 'attempts': MAX_SHORTCODE_ATTEMPTS})
        raise ExhaustedRetriesError(f'Failed to generate a unique short code after {MAX_SHORTCODE_ATTEMPTS} attempts.')

    def access(self, shortcode: str) -> Optional[str]:
        """Follow a short URL

        Counts one click and returns the original URL if the link is
        accessible. Expired and exhausted links trigger the matching
        notification and are left unchanged.

        Args:
            shortcode (str):
                The short code to follow.

        Returns:
            str | None: the original URL, None if the link is unknown or not accessible.
        """
        try:
            short_url = self.short_urls.hit(shortcode, now=self.clock())
        except ShortURLNotFoundError:
            return None
        except ShortURLExpiredError as e:
            self.notifications.on_expired(shortcode, e.short_url.target)
            return None
        except ClickLimitReachedError as e:
            self.notifications.on_quota_exhausted(shortcode, e.short_url.target, e.short_url.click_limit)
            return None

        logger.debug(
            'Processed click.',
            extra={'shortcode': shortcode, 'clickCount': short_url.click_count, 'clickLimit': short_url.click_limit},
        )
        return short_url.target

    def _owned_short_url(self, shortcode: str, requester_id: UUID, action: str) -> ShortURLModel:
        short_url = self.short_urls.get(shortcode)
        if short_url is None:
            raise NotFoundError(f'Short URL not found: {shortcode}')
        if not short_url.is_owned_by(requester_id):
            raise ForbiddenError(f'You are not allowed to {action} this link.')
        return short_url

    def update_click_limit(self, shortcode: str, requester_id: UUID, click_limit: int) -> ShortURLModel:
        """Replace the click limit of a link owned by the requester

        Raises:
            NotFoundError:
                Unknown short code.
            ForbiddenError:
                The requester does not own the link.
            InvalidArgumentError:
                The limit is negative and not -1.
        """
        self._owned_short_url(shortcode, requester_id, 'modify')
        _validate_click_limit(click_limit)

        try:
            short_url = self.short_urls.update_click_limit(shortcode, click_limit)
        except ShortURLNotFoundError as e:
            raise NotFoundError(f'Short URL not found: {shortcode}') from e

        logger.info('Updated click limit.', extra={'shortcode': shortcode, 'clickLimit': click_limit})
        return short_url

    def delete_short_url(self, shortcode: str, requester_id: UUID) -> None:
        """Delete a link owned by the requester

        Raises:
            NotFoundError:
                Unknown short code.
            ForbiddenError:
                The requester does not own the link.
        """
        self._owned_short_url(shortcode, requester_id, 'delete')
        if self.short_urls.delete(shortcode) is None:
            raise NotFoundError(f'Short URL not found: {shortcode}')
        logger.info('Deleted short URL.', extra={'shortcode': shortcode, 'userId': str(requester_id)})

    def list_by_owner(self, owner_id: UUID) -> list[ShortURLModel]:
        return sorted(self.short_urls.by_owner(owner_id), key=lambda short_url: short_url.created_at)

    def get_info(self, shortcode: str) -> Optional[ShortURLModel]:
        return self.short_urls.get(shortcode)

    def cleanup_expired(self) -> int:
        """Delete every expired short URL

        Each removed link triggers an expiry notification. Links that are
        only quota-exhausted are kept.

        Returns:
            int: number of deleted links.
        """
        now = self.clock()
        deleted = 0
        for short_url in self.short_urls.all():
            if not short_url.is_expired(now):
                continue
            # A concurrent delete may have won the race, only count our own removals
            if self.short_urls.delete(short_url.shortcode) is None:
                continue
            self.notifications.on_expired(short_url.shortcode, short_url.target)
            deleted += 1

        if deleted > 0:
            logger.info('Cleanup removed expired links.', extra={'deleted': deleted})
        return deleted

    def statistics(self) -> Statistics:
        return Statistics(user_count=self.users.count(), link_count=self.short_urls.count())
