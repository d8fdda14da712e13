"""Unit tests for the ShortURLModel dataclass in short_url_model.py.

Test coverage includes:

1. Model creation
   - Ensures instances can be created and click_count starts at 0.

2. Expiry
   - Verifies a link is expired only strictly after expires_at.

3. Click limit
   - Verifies limit detection for limited, zero and unlimited (-1) quotas.

4. Status derivation
   - Ensures expired wins over quota exhausted.

5. Ownership
   - Confirms only the recorded owner owns the link.

6. Immutability
   - Verifies that all fields are frozen.
"""

from dataclasses import FrozenInstanceError, replace
from datetime import datetime, timedelta, UTC
from uuid import uuid4

import pytest
from freezegun import freeze_time

from linkshortener.models import LinkStatus, ShortURLModel


# -------------------------------------------------
# 1. Model creation
# -------------------------------------------------


def test_valid_short_url_model_creation():
    """Ensure ShortURLModel can be created with valid data and a zero click count."""
    owner_id = uuid4()
    created_at = datetime(2026, 1, 1, tzinfo=UTC)
    expires_at = created_at + timedelta(days=1)

    short_url = ShortURLModel(
        target='https://example.com/article/123',
        shortcode='abc123',
        owner_id=owner_id,
        created_at=created_at,
        expires_at=expires_at,
        click_limit=10,
    )

    assert short_url.target == 'https://example.com/article/123'
    assert short_url.shortcode == 'abc123'
    assert short_url.owner_id == owner_id
    assert short_url.created_at == created_at
    assert short_url.expires_at == expires_at
    assert short_url.click_limit == 10
    assert short_url.click_count == 0
    assert not short_url.unlimited


# -------------------------------------------------
# 2. Expiry
# -------------------------------------------------


def test_is_expired_boundaries(make_short_url):
    """A link is expired only strictly after its expiry time."""
    expires_at = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)
    short_url = make_short_url(expires_at=expires_at)

    assert not short_url.is_expired(expires_at - timedelta(seconds=1))
    assert not short_url.is_expired(expires_at)
    assert short_url.is_expired(expires_at + timedelta(microseconds=1))


def test_is_expired_defaults_to_current_time(make_short_url):
    """Without an explicit time the current UTC time is used."""
    with freeze_time('2026-01-01 12:00:00') as frozen:
        short_url = make_short_url(expires_at=datetime(2026, 1, 1, 13, 0, 0, tzinfo=UTC))
        assert not short_url.is_expired()

        frozen.tick(timedelta(hours=1, seconds=1))
        assert short_url.is_expired()


# -------------------------------------------------
# 3. Click limit
# -------------------------------------------------


@pytest.mark.parametrize(
    'click_limit, click_count, reached',
    [
        (3, 0, False),
        (3, 2, False),
        (3, 3, True),
        (0, 0, True),
        (-1, 0, False),
        (-1, 10**6, False),
    ],
)
def test_has_reached_click_limit(make_short_url, click_limit, click_count, reached):
    """Limits are reached when clicks catch up; -1 never runs out."""
    short_url = make_short_url(click_limit=click_limit, click_count=click_count)
    assert short_url.has_reached_click_limit() is reached


# -------------------------------------------------
# 4. Status derivation
# -------------------------------------------------


def test_status(make_short_url):
    """Derive active, quota exhausted and expired states."""
    now = datetime(2026, 1, 1, tzinfo=UTC)
    active = make_short_url(expires_at=now + timedelta(hours=1), click_limit=1)
    exhausted = replace(active, click_count=1)
    expired = make_short_url(expires_at=now - timedelta(hours=1))
    expired_and_exhausted = replace(expired, click_limit=1, click_count=1)

    assert active.status(now) is LinkStatus.ACTIVE
    assert active.is_accessible(now)
    assert exhausted.status(now) is LinkStatus.QUOTA_EXHAUSTED
    assert not exhausted.is_accessible(now)
    assert expired.status(now) is LinkStatus.EXPIRED
    assert expired_and_exhausted.status(now) is LinkStatus.EXPIRED


# -------------------------------------------------
# 5. Ownership
# -------------------------------------------------


def test_is_owned_by(make_short_url):
    owner_id = uuid4()
    short_url = make_short_url(owner_id=owner_id)

    assert short_url.is_owned_by(owner_id)
    assert not short_url.is_owned_by(uuid4())


# -------------------------------------------------
# 6. Immutability
# -------------------------------------------------


@pytest.mark.parametrize(
    'field, new_value',
    [
        ('target', 'https://example.com/article/456'),
        ('shortcode', 'def456'),
        ('click_limit', 3000),
        ('click_count', 1),
        ('expires_at', datetime(2027, 1, 1, tzinfo=UTC)),
    ],
)
def test_short_url_model_immutability(make_short_url, field, new_value):
    """Attempting to modify fields should raise FrozenInstanceError."""
    short_url = make_short_url()

    with pytest.raises(FrozenInstanceError):
        setattr(short_url, field, new_value)
