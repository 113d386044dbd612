"""Notifications emitted by the profile controller.

The presentation layer subclasses ProfileListener and overrides the
callbacks it cares about. Every callback runs on the event loop that owns
the controller.
"""

from collections.abc import Sequence

from ..core.exceptions import FolioError
from ..schemas.feed import ErrorKind, FeedItem
from ..schemas.profiles import FollowSnapshot, Profile


class ProfileListener:
    """No-op base for controller notifications."""

    def profile_updated(self, profile: Profile) -> None:
        """The profile was committed or completed from a fetch."""

    def items_appended(self, items: Sequence[FeedItem]) -> None:
        """New, previously unseen feed items were merged into the feed.

        ``items`` are given in the order they now hold in the feed, which
        can place them among items shown earlier.
        """

    def follow_state_changed(self, snapshot: FollowSnapshot) -> None:
        """Relationship state, pending flag or follower counter changed."""

    def error_occurred(self, kind: ErrorKind, error: FolioError | None = None) -> None:
        """An asynchronous operation failed."""

    def login_required(self) -> None:
        """A follow toggle was attempted without a logged in viewer."""

    def feed_empty(self) -> None:
        """The profile has no feed items, so no page will be fetched."""

    def follow_hidden(self) -> None:
        """The viewer is the profile subject; hide the follow affordance."""
