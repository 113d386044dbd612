"""Infinite-scroll pagination of a profile's feed.

FeedPaginator owns the page cursor, the loading and end-of-data flags and
the ordered, identity-deduplicated list of items shown so far. The scroll
listener in the presentation layer may call ``load_more`` as eagerly as it
likes: calls made while a page is in flight, after the end of the feed, or
for an empty profile are ignored.
"""

import asyncio
from collections.abc import Callable, Iterable
from operator import attrgetter

from ..core.decorators import Outcome, handle_errors
from ..core.logging import ContextLogger
from ..schemas.feed import ErrorKind, FeedItem
from .client import RemoteProfileClient
from .events import ProfileListener

logger = ContextLogger(__name__)


class FeedPaginator:
    """Paginated feed state for a single profile.

    Args:
        client: Client used to fetch pages.
        profile_id: Owner of the feed.
        expected_count: Number of items the profile reports; zero disables
            loading entirely.
        listener: Receives ``items_appended`` and ``error_occurred``.
        page_size: Items requested per page.
        first_page: Page number the cursor starts at.
        is_active: Returns False once the owning controller is torn down.
    """

    def __init__(
        self,
        client: RemoteProfileClient,
        profile_id: int,
        expected_count: int,
        listener: ProfileListener,
        *,
        page_size: int,
        first_page: int = 1,
        is_active: Callable[[], bool] = lambda: True,
    ) -> None:
        self._client = client
        self._profile_id = profile_id
        self._expected_count = expected_count
        self._listener = listener
        self._page_size = page_size
        self._is_active = is_active

        self._cursor = first_page
        self._is_loading = False
        self._reached_end = False
        self._items: list[FeedItem] = []
        self._seen: set[int] = set()

    @property
    def cursor(self) -> int:
        """Next page to request."""
        return self._cursor

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def reached_end(self) -> bool:
        return self._reached_end

    @property
    def items(self) -> tuple[FeedItem, ...]:
        return tuple(self._items)

    def load_more(self) -> asyncio.Task | None:
        """Request the next page unless loading, ended, or empty.

        Returns:
            The task completing the page fetch, or None when ignored.
        """
        if self._is_loading or self._reached_end or self._expected_count == 0:
            return None

        page = self._cursor
        self._is_loading = True
        logger.debug(
            "Loading feed page",
            extra={"profile_id": self._profile_id, "page": page},
        )
        return asyncio.create_task(self._load_page(page))

    @handle_errors(logger=logger)
    async def _fetch(self, page: int) -> list[FeedItem]:
        return await self._client.fetch_feed_page(
            self._profile_id, page, page_size=self._page_size
        )

    async def _load_page(self, page: int) -> None:
        outcome: Outcome[list[FeedItem]] = await self._fetch(page)
        if not self._is_active():
            return
        if page != self._cursor or not self._is_loading:
            logger.warning(
                "Discarding stale feed page",
                extra={"profile_id": self._profile_id, "page": page},
            )
            return

        self._is_loading = False
        if not outcome.ok:
            # cursor stays put so the next load_more retries this page
            self._listener.error_occurred(ErrorKind.FEED_PAGE_FAILED, outcome.error)
            return

        fetched = outcome.value or []
        self._cursor = page + 1
        if not fetched:
            self._reached_end = True
            logger.info(
                "Reached end of feed",
                extra={"profile_id": self._profile_id, "page": page},
            )
            return

        added = self._merge(fetched)
        logger.debug(
            f"Merged {len(added)} of {len(fetched)} items",
            extra={"profile_id": self._profile_id, "page": page},
        )
        if added:
            self._listener.items_appended(added)

    def _merge(self, fetched: Iterable[FeedItem]) -> list[FeedItem]:
        """Add unseen items and re-sort newest first.

        The sort is stable, so items sharing a sort key keep the order in
        which they were first shown. The added items are returned in the
        order they now hold in ``items``.
        """
        added = []
        for item in fetched:
            if item.id in self._seen:
                continue
            self._seen.add(item.id)
            added.append(item)

        if not added:
            return []

        self._items = sorted(
            self._items + added, key=attrgetter("created_at"), reverse=True
        )
        added_ids = {item.id for item in added}
        return [item for item in self._items if item.id in added_ids]
