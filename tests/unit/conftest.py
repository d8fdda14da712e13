import logging
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
from pytest import MonkeyPatch

from linkshortener.dao.memory import ShortURLMemoryDAO, UserMemoryDAO
from linkshortener.models import ShortURLModel
from linkshortener.services import LinkService, NotificationSink
from linkshortener.utils import AppConfig, ShortcodeGenerator
from linkshortener.utils.constants import (
    APP_ENV_ENV,
    CONFIG_PATH_ENV,
    LINK_TTL_SECONDS_ENV,
    LINK_DEFAULT_CLICK_LIMIT_ENV,
    CLEANUP_INTERVAL_SECONDS_ENV,
    SHORTENER_DOMAIN_ENV,
    SHORTENER_CODE_LENGTH_ENV,
    NOTIFICATIONS_ENABLED_ENV,
    LOG_LEVEL_ENV,
)


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    """Isolate tests from configuration in the developer's environment."""
    for name in (
        APP_ENV_ENV,
        CONFIG_PATH_ENV,
        LINK_TTL_SECONDS_ENV,
        LINK_DEFAULT_CLICK_LIMIT_ENV,
        CLEANUP_INTERVAL_SECONDS_ENV,
        SHORTENER_DOMAIN_ENV,
        SHORTENER_CODE_LENGTH_ENV,
        NOTIFICATIONS_ENABLED_ENV,
        LOG_LEVEL_ENV,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        link_ttl_seconds=3600,
        default_click_limit=5,
        cleanup_interval_seconds=60,
        shortcode_length=6,
        notifications_enabled=True,
        shortener_domain='short.test',
    )


@pytest.fixture
def user_dao() -> UserMemoryDAO:
    return UserMemoryDAO()


@pytest.fixture
def short_url_dao() -> ShortURLMemoryDAO:
    return ShortURLMemoryDAO()


@pytest.fixture
def notifications() -> NotificationSink:
    """Mock a notification sink to record delivered events."""
    return MagicMock(spec=NotificationSink)


@pytest.fixture
def service(user_dao, short_url_dao, notifications, app_config) -> LinkService:
    return LinkService(
        users=user_dao,
        short_urls=short_url_dao,
        generator=ShortcodeGenerator(length=app_config.shortcode_length),
        notifications=notifications,
        config=app_config,
    )


@pytest.fixture
def owner_id(service) -> UUID:
    return service.create_user()


@pytest.fixture
def other_user_id(service) -> UUID:
    return service.create_user()


@pytest.fixture
def restore_root_logger():
    """Undo logging.config changes made by initialize_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def make_short_url():
    """Build ShortURLModel instances with sensible defaults."""

    def _make(**overrides) -> ShortURLModel:
        now = datetime.now(UTC)
        fields = {
            'target': 'https://example.com/test',
            'shortcode': 'abc123',
            'owner_id': uuid4(),
            'created_at': now,
            'expires_at': now + timedelta(hours=1),
            'click_limit': 3,
        }
        fields.update(overrides)
        return ShortURLModel(**fields)

    return _make
