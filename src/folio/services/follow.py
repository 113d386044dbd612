"""Follow relationship state machine.

FollowStateMachine tracks whether the viewer follows the profile subject
and keeps a locally adjusted follower counter. Toggles are optimistic: the
new state and counter are published before the service answers. Only one
toggle may be in flight; further toggles are ignored until its response has
been processed.
"""

import asyncio
from collections.abc import Callable
from dataclasses import replace

from ..core.auth import ViewerSession
from ..core.decorators import Outcome, handle_errors
from ..core.logging import ContextLogger
from ..schemas.feed import ErrorKind
from ..schemas.profiles import FollowSnapshot, FollowState
from .client import RemoteProfileClient
from .events import ProfileListener

logger = ContextLogger(__name__)


class FollowStateMachine:
    """Tri-state follow relationship plus pending toggle and follower counter.

    Args:
        client: Client used for relationship calls.
        profile_id: The profile subject.
        follower_count: Starting value of the follower counter.
        session: Viewer session; toggling requires a logged in viewer.
        listener: Receives state changes, errors and login prompts.
        rollback_on_failure: Revert state and counter when a toggle fails.
        is_active: Returns False once the owning controller is torn down.
    """

    def __init__(
        self,
        client: RemoteProfileClient,
        profile_id: int,
        follower_count: int,
        session: ViewerSession,
        listener: ProfileListener,
        *,
        rollback_on_failure: bool = False,
        is_active: Callable[[], bool] = lambda: True,
    ) -> None:
        self._client = client
        self._profile_id = profile_id
        self._session = session
        self._listener = listener
        self._rollback_on_failure = rollback_on_failure
        self._is_active = is_active

        self._snapshot = FollowSnapshot(follower_count=follower_count)
        # bumped on every toggle; responses issued under an older value are stale
        self._generation = 0

    @property
    def snapshot(self) -> FollowSnapshot:
        return self._snapshot

    def _publish(self, snapshot: FollowSnapshot) -> None:
        self._snapshot = snapshot
        logger.debug(
            "Follow state changed",
            extra={
                "profile_id": self._profile_id,
                "state": snapshot.state.value,
                "pending_toggle": snapshot.pending_toggle,
                "follower_count": snapshot.follower_count,
            },
        )
        self._listener.follow_state_changed(snapshot)

    def check(self) -> asyncio.Task | None:
        """Ask the service for the current relationship.

        The answer is dropped if a toggle was issued after the check or is
        still pending when the answer arrives.
        """
        if not self._session.is_logged_in:
            return None
        return asyncio.create_task(self._run_check(self._generation))

    @handle_errors(logger=logger)
    async def _fetch_state(self) -> FollowState:
        return await self._client.check_following(self._profile_id, self._session)

    async def _run_check(self, generation: int) -> None:
        outcome: Outcome[FollowState] = await self._fetch_state()
        if not self._is_active():
            return
        if self._snapshot.pending_toggle or generation != self._generation:
            logger.debug(
                "Ignoring relationship check superseded by a toggle",
                extra={"profile_id": self._profile_id},
            )
            return
        if not outcome.ok:
            self._listener.error_occurred(ErrorKind.FOLLOW_CHECK_FAILED, outcome.error)
            return
        self._publish(replace(self._snapshot, state=outcome.value))

    def toggle(self) -> asyncio.Task | None:
        """Flip the relationship optimistically and issue the matching call.

        Returns:
            The task completing the follow/unfollow call, or None when the
            viewer is logged out or a toggle is already pending.
        """
        if not self._session.is_logged_in:
            logger.info("Login required to follow", extra={"profile_id": self._profile_id})
            self._listener.login_required()
            return None
        if self._snapshot.pending_toggle:
            logger.debug("Toggle already pending", extra={"profile_id": self._profile_id})
            return None

        previous = self._snapshot
        if previous.state is FollowState.FOLLOWING:
            target, delta = FollowState.NOT_FOLLOWING, -1
        else:
            target, delta = FollowState.FOLLOWING, 1

        self._generation += 1
        self._publish(
            FollowSnapshot(
                state=target,
                pending_toggle=True,
                follower_count=previous.follower_count + delta,
            )
        )
        return asyncio.create_task(self._run_toggle(self._generation, previous, target))

    @handle_errors(logger=logger)
    async def _mutate(self, target: FollowState) -> None:
        if target is FollowState.FOLLOWING:
            await self._client.follow(self._profile_id, self._session)
        else:
            await self._client.unfollow(self._profile_id, self._session)

    async def _run_toggle(
        self,
        generation: int,
        previous: FollowSnapshot,
        target: FollowState,
    ) -> None:
        outcome: Outcome[None] = await self._mutate(target)
        if not self._is_active() or generation != self._generation:
            return

        if outcome.ok:
            self._publish(replace(self._snapshot, pending_toggle=False))
            return

        if self._rollback_on_failure:
            self._publish(replace(previous, pending_toggle=False))
        else:
            self._publish(replace(self._snapshot, pending_toggle=False))
        self._listener.error_occurred(ErrorKind.FOLLOW_TOGGLE_FAILED, outcome.error)
