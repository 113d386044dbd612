"""Profile-related schema definitions.

This module defines Pydantic models for profile records returned by the
remote service, plus the follow relationship value types owned by the
controller.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Profile(BaseModel):
    """Schema for a remote user's profile.

    A profile may start life as a placeholder that only knows an identity
    field and a display name hint; it is completed in place once the full
    record has been fetched.
    """

    id: int | None = Field(None, description="Server-assigned profile ID")
    handle: str | None = Field(
        None, alias="username", description="Handle usable as an alternate key"
    )
    name: str = Field("", description="Display name")
    avatar_url: str | None = Field(None, description="Avatar image URL")
    bio: str | None = Field(None, description="Profile bio text")
    shot_count: int = Field(0, alias="shots_count", ge=0, description="Feed size")
    follower_count: int = Field(0, alias="followers_count", ge=0)
    like_count: int = Field(0, alias="likes_count", ge=0)
    is_placeholder: bool = Field(False, exclude=True)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="after")
    def require_identity(self) -> "Profile":
        if self.id is None and not self.handle:
            raise ValueError("profile requires an id or a handle")
        return self

    @classmethod
    def placeholder(
        cls,
        *,
        id: int | None = None,
        handle: str | None = None,
        name: str = "",
    ) -> "Profile":
        """Build a partial profile from identity fields and a display name hint."""
        return cls(id=id, handle=handle, name=name, is_placeholder=True)

    @property
    def high_quality_avatar_url(self) -> str | None:
        """Avatar URL upgraded from the normal to the original rendition."""
        if not self.avatar_url:
            return None
        return self.avatar_url.replace("/normal/", "/original/")

    @property
    def lookup_key(self) -> int | str:
        """Key used to fetch this profile, preferring the numeric id."""
        return self.id if self.id is not None else self.handle

    def complete_with(self, fetched: "Profile") -> None:
        """Fill this placeholder in place from a fetched record.

        Raises:
            ValueError: If the fetched record has no id or a different one.
        """
        if fetched.id is None:
            raise ValueError(f"fetched profile {fetched.handle!r} has no id")
        if self.id is not None and fetched.id != self.id:
            raise ValueError(f"profile id mismatch: {self.id} != {fetched.id}")
        for field_name in type(self).model_fields:
            setattr(self, field_name, getattr(fetched, field_name))
        self.is_placeholder = False


class FollowState(str, Enum):
    """Relationship between the viewer and the profile subject."""

    UNKNOWN = "unknown"
    NOT_FOLLOWING = "not_following"
    FOLLOWING = "following"


@dataclass(frozen=True)
class FollowSnapshot:
    """Follow relationship value passed to listeners.

    Attributes:
        state: Current (possibly optimistic) relationship.
        pending_toggle: True while a follow/unfollow request is in flight.
        follower_count: Locally adjusted follower counter.
    """

    state: FollowState = FollowState.UNKNOWN
    pending_toggle: bool = False
    follower_count: int = 0

    @property
    def is_following(self) -> bool:
        return self.state is FollowState.FOLLOWING
