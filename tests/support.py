"""Shared helpers for driving the controller's asynchronous calls by hand."""

import asyncio
from unittest.mock import AsyncMock

from folio.services.events import ProfileListener


class PendingCalls:
    """Async side effect that parks every call until the test settles it."""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple, asyncio.Future]] = []

    async def park(self, *args, **kwargs):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((args, future))
        return await future

    def __len__(self) -> int:
        return len(self.calls)

    @property
    def outstanding(self) -> int:
        return sum(1 for _, future in self.calls if not future.done())

    def args(self, index: int = -1) -> tuple:
        return self.calls[index][0]

    def resolve(self, index: int = -1, value=None) -> None:
        self.calls[index][1].set_result(value)

    def fail(self, index: int = -1, error: Exception | None = None) -> None:
        self.calls[index][1].set_exception(error)


class RecordingListener(ProfileListener):
    """Listener that records every notification in order."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def profile_updated(self, profile):
        self.events.append(("profile_updated", profile.model_copy()))

    def items_appended(self, items):
        self.events.append(("items_appended", list(items)))

    def follow_state_changed(self, snapshot):
        self.events.append(("follow_state_changed", snapshot))

    def error_occurred(self, kind, error=None):
        self.events.append(("error_occurred", kind, error))

    def login_required(self):
        self.events.append(("login_required",))

    def feed_empty(self):
        self.events.append(("feed_empty",))

    def follow_hidden(self):
        self.events.append(("follow_hidden",))

    def named(self, name: str) -> list[tuple]:
        return [event for event in self.events if event[0] == name]

    @property
    def snapshots(self):
        return [event[1] for event in self.named("follow_state_changed")]


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def pending(mock: AsyncMock) -> PendingCalls:
    """The PendingCalls side effect behind a mocked client method."""
    return mock.side_effect.__self__
