"""Test configuration and fixtures for the Folio package.

This module provides common fixtures used across all test modules:
- Settings with small page sizes
- Viewer sessions
- A mocked RemoteProfileClient whose calls the test resolves by hand
- A listener recording every notification
- Profile and feed item factories
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from folio.core.auth import ViewerSession
from folio.core.settings import (
    DisplaySettings,
    FeedSettings,
    FollowSettings,
    Settings,
)
from folio.schemas.feed import FeedItem
from folio.schemas.profiles import Profile
from folio.services.client import RemoteProfileClient
from support import PendingCalls, RecordingListener

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def test_settings() -> Settings:
    """Fixture for test settings."""
    return Settings(
        feed=FeedSettings(page_size=3, first_page=1),
        follow=FollowSettings(rollback_on_failure=False),
        display=DisplaySettings(locale="en_US"),
    )


@pytest.fixture
def viewer() -> ViewerSession:
    """Logged in viewer who is not the profile subject."""
    return ViewerSession(user_id=1, access_token="test-token")


@pytest.fixture
def anonymous() -> ViewerSession:
    return ViewerSession()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def make_profile():
    """Factory for complete profiles."""

    def _make(**overrides) -> Profile:
        data = {
            "id": 42,
            "handle": "simon",
            "name": "Simon",
            "avatar_url": "https://cdn.example.com/users/42/avatars/normal/a.png",
            "bio": "Designer",
            "shot_count": 7,
            "follower_count": 10,
            "like_count": 3,
        }
        data.update(overrides)
        return Profile(**data)

    return _make


@pytest.fixture
def make_items():
    """Factory for feed items, newest first, with ids ``start`` onwards."""

    def _make(start: int, count: int) -> list[FeedItem]:
        return [
            FeedItem(
                id=item_id,
                title=f"Shot {item_id}",
                created_at=BASE_TIME - timedelta(hours=item_id),
            )
            for item_id in range(start, start + count)
        ]

    return _make


@pytest.fixture
def mock_client():
    """Fixture for a mocked RemoteProfileClient with parked calls."""
    client = MagicMock(spec=RemoteProfileClient)
    client.fetch_profile = AsyncMock(side_effect=PendingCalls().park)
    client.check_following = AsyncMock(side_effect=PendingCalls().park)
    client.follow = AsyncMock(side_effect=PendingCalls().park)
    client.unfollow = AsyncMock(side_effect=PendingCalls().park)
    client.fetch_feed_page = AsyncMock(side_effect=PendingCalls().park)
    return client
