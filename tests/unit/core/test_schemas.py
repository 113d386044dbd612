from __future__ import annotations

import pydantic
import pytest

from folio.core.auth import ViewerSession
from folio.schemas.profiles import Profile


def test_profile_requires_id_or_handle() -> None:
    with pytest.raises(pydantic.ValidationError):
        Profile(name="Nobody")


def test_placeholder_is_completed_in_place() -> None:
    placeholder = Profile.placeholder(handle="simon", name="Simon")
    fetched = Profile.model_validate(
        {"id": 42, "username": "simon", "name": "Simon C", "shots_count": 4}
    )

    placeholder.complete_with(fetched)

    assert placeholder.id == 42
    assert placeholder.name == "Simon C"
    assert placeholder.shot_count == 4
    assert not placeholder.is_placeholder


def test_completing_with_different_id_is_rejected() -> None:
    placeholder = Profile.placeholder(id=42)

    with pytest.raises(ValueError):
        placeholder.complete_with(Profile(id=7))

    assert placeholder.id == 42
    assert placeholder.is_placeholder


def test_completing_with_record_without_id_is_rejected() -> None:
    placeholder = Profile.placeholder(handle="simon", name="Simon")

    with pytest.raises(ValueError):
        placeholder.complete_with(Profile(handle="simon", shot_count=3))

    assert placeholder.id is None
    assert placeholder.is_placeholder


def test_high_quality_avatar_url() -> None:
    profile = Profile(id=1, avatar_url="https://cdn/avatars/normal/me.png")
    assert profile.high_quality_avatar_url == "https://cdn/avatars/original/me.png"
    assert Profile(id=1).high_quality_avatar_url is None


def test_lookup_key_prefers_id() -> None:
    assert Profile(id=42, handle="simon").lookup_key == 42
    assert Profile(handle="simon").lookup_key == "simon"


def test_viewer_session_subject_check() -> None:
    viewer = ViewerSession(user_id=42, access_token="token")

    assert viewer.is_logged_in
    assert viewer.is_subject(42)
    assert not viewer.is_subject(7)
    assert not ViewerSession(user_id=42).is_subject(42)
    assert viewer.authorization_headers == {"Authorization": "Bearer token"}
    assert ViewerSession().authorization_headers == {}
