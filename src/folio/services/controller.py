"""Profile screen controller.

ProfileController owns the profile being shown, its feed paginator and the
follow state machine. The presentation layer drives it with ``initialize``,
``load_more`` and ``toggle_follow`` and renders whatever the listener is
told. All work runs on one event loop; the only suspension points are the
remote calls, so no locking is needed. Completion handlers check
``is_active`` and do nothing once the controller has been closed.
"""

import asyncio

from ..core.auth import ANONYMOUS, ViewerSession
from ..core.decorators import Outcome, handle_errors
from ..core.exceptions import ValidationError
from ..core.formatting import format_count
from ..core.logging import ContextLogger
from ..core.settings import Settings, settings as default_settings
from ..schemas.feed import ErrorKind, FeedItem
from ..schemas.profiles import FollowSnapshot, Profile
from .client import RemoteProfileClient
from .events import ProfileListener
from .follow import FollowStateMachine
from .paginator import FeedPaginator

logger = ContextLogger(__name__)


class ProfileController:
    """Orchestrates profile resolution, feed paging and following.

    Args:
        client: Shared remote client.
        session: The viewer's session, sent with every relationship call.
        listener: Receives every notification; defaults to a no-op listener.
        settings: Feed, follow and display settings.
    """

    def __init__(
        self,
        client: RemoteProfileClient,
        session: ViewerSession = ANONYMOUS,
        listener: ProfileListener | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._client = client
        self._session = session
        self._listener = listener or ProfileListener()
        self._settings = settings or default_settings

        self._profile: Profile | None = None
        self._paginator: FeedPaginator | None = None
        self._follow: FollowStateMachine | None = None
        self._active = True
        self._failed = False
        self._can_follow = True
        self._tasks: set[asyncio.Task] = set()

    @property
    def is_active(self) -> bool:
        return self._active

    def _still_active(self) -> bool:
        return self._active

    @property
    def has_failed(self) -> bool:
        """Whether the profile could not be resolved; terminal for this instance."""
        return self._failed

    @property
    def profile(self) -> Profile | None:
        return self._profile

    @property
    def is_available(self) -> bool:
        """Whether the profile id is known and the feed/follow parts exist."""
        return self._paginator is not None and self._follow is not None

    @property
    def items(self) -> tuple[FeedItem, ...]:
        return self._paginator.items if self._paginator else ()

    @property
    def follow_snapshot(self) -> FollowSnapshot | None:
        return self._follow.snapshot if self._follow else None

    @property
    def can_follow(self) -> bool:
        return self._can_follow

    @property
    def follower_label(self) -> str:
        snapshot = self.follow_snapshot
        count = snapshot.follower_count if snapshot else self._profile_count("follower_count")
        return format_count(count, "follower", self._settings.locale)

    @property
    def shot_label(self) -> str:
        return format_count(self._profile_count("shot_count"), "shot", self._settings.locale)

    @property
    def like_label(self) -> str:
        return format_count(self._profile_count("like_count"), "like", self._settings.locale)

    def _profile_count(self, field: str) -> int:
        return getattr(self._profile, field) if self._profile else 0

    def initialize(
        self,
        profile: Profile | None = None,
        *,
        id: int | None = None,
        handle: str | None = None,
        name: str = "",
    ) -> asyncio.Task | None:
        """Start the controller from a complete profile or identity fields.

        A complete profile is committed immediately. Otherwise a placeholder
        carrying ``name`` is committed and the full record is fetched.

        Returns:
            The profile fetch task, or None if nothing needed fetching.

        Raises:
            ValidationError: If neither a profile, an id nor a handle is given.
        """
        if self._profile is not None:
            logger.warning("Controller already initialized")
            return None

        if profile is not None and not profile.is_placeholder and profile.id is not None:
            self._profile = profile
            self._listener.profile_updated(profile)
            self._on_profile_available()
            return None

        if profile is not None:
            id, handle, name = profile.id, profile.handle, profile.name or name
        if id is None and not handle:
            raise ValidationError("A profile, an id or a handle is required")

        self._profile = Profile.placeholder(id=id, handle=handle, name=name)
        self._listener.profile_updated(self._profile)
        return self._track(asyncio.create_task(self._resolve(self._profile.lookup_key)))

    @handle_errors(logger=logger)
    async def _fetch_profile(self, key: int | str) -> Profile:
        return await self._client.fetch_profile(key)

    async def _resolve(self, key: int | str) -> None:
        outcome: Outcome[Profile] = await self._fetch_profile(key)
        if not self._active:
            return

        error = outcome.error
        if outcome.ok:
            try:
                self._profile.complete_with(outcome.value)
            except ValueError as e:
                error = ValidationError(str(e), details={"key": key})
        if error is not None:
            self._failed = True
            logger.error("Profile unavailable", extra={"profile_id": key})
            self._listener.error_occurred(ErrorKind.PROFILE_UNAVAILABLE, error)
            return

        self._listener.profile_updated(self._profile)
        self._on_profile_available()

    def _on_profile_available(self) -> None:
        profile = self._profile

        self._follow = FollowStateMachine(
            self._client,
            profile.id,
            profile.follower_count,
            self._session,
            self._listener,
            rollback_on_failure=self._settings.follow.rollback_on_failure,
            is_active=self._still_active,
        )
        self._paginator = FeedPaginator(
            self._client,
            profile.id,
            profile.shot_count,
            self._listener,
            page_size=self._settings.feed.page_size,
            first_page=self._settings.feed.first_page,
            is_active=self._still_active,
        )
        self._listener.follow_state_changed(self._follow.snapshot)

        if self._session.is_subject(profile.id):
            self._can_follow = False
            self._listener.follow_hidden()
        else:
            self._track(self._follow.check())

        if profile.shot_count > 0:
            self._track(self._paginator.load_more())
        else:
            self._listener.feed_empty()

    def load_more(self) -> asyncio.Task | None:
        """Fetch the next feed page; ignored before the profile is available."""
        if not self._active or self._paginator is None:
            return None
        return self._track(self._paginator.load_more())

    def toggle_follow(self) -> asyncio.Task | None:
        """Follow or unfollow the subject; ignored before the profile is available."""
        if not self._active or self._follow is None or not self._can_follow:
            return None
        return self._track(self._follow.toggle())

    def refresh_following(self) -> asyncio.Task | None:
        """Re-check the relationship with the service."""
        if not self._active or self._follow is None or not self._can_follow:
            return None
        return self._track(self._follow.check())

    def close(self) -> None:
        """Tear down; in-flight calls finish but their results are dropped."""
        if self._active:
            logger.debug("Controller closed")
        self._active = False

    def _track(self, task: asyncio.Task | None) -> asyncio.Task | None:
        if task is not None:
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until every call issued so far, and any it triggered, has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
