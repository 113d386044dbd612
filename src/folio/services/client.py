"""Remote profile service client.

This module provides RemoteProfileClient, a thin asynchronous wrapper over
the remote service's JSON API. It covers the five calls the profile screen
needs:

- Fetching a profile by numeric id or by handle
- Checking, creating and deleting the viewer's follow relationship
- Fetching one page of a profile's feed

The client holds no per-profile or per-viewer state and can be shared by
any number of controllers. Relationship calls take the viewer's session
as an argument and send its bearer token with that request only. Failures are raised as ``FolioError`` subclasses; the one
exception is the relationship check, where a 404 is a valid answer.
"""

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.auth import ViewerSession
from ..core.exceptions import (
    LoginRequiredError,
    NetworkError,
    ProfileNotFoundError,
    ValidationError,
)
from ..core.logging import ContextLogger
from ..core.settings import Settings, settings as default_settings
from ..schemas.feed import FeedItem
from ..schemas.profiles import FollowState, Profile

logger = ContextLogger(__name__)


class RemoteProfileClient:
    """Asynchronous client for profile, relationship and feed endpoints.

    Args:
        settings: Settings providing the base URL, timeout and headers.
        transport: Optional httpx transport, used to stub the wire in tests.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self._http = httpx.AsyncClient(
            base_url=self.settings.service.base_url,
            headers=self.settings.service.headers,
            timeout=self.settings.service.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RemoteProfileClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with logger.track_time(f"{method} {path}"):
                return await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                f"Request failed: {method} {path}",
                extra={"error": str(e)},
            )
            raise NetworkError(
                f"{method} {path} failed: {e}",
                details={"method": method, "path": path},
            ) from e

    @staticmethod
    def _authorization(
        session: ViewerSession, action: str, profile_id: int
    ) -> dict[str, str]:
        if not session.is_logged_in:
            raise LoginRequiredError(
                f"Login required to {action}", details={"profile_id": profile_id}
            )
        return session.authorization_headers

    @staticmethod
    def _unexpected(response: httpx.Response) -> NetworkError:
        request = response.request
        return NetworkError(
            f"Unexpected status {response.status_code} for "
            f"{request.method} {request.url.path}",
            details={"status_code": response.status_code},
        )

    async def fetch_profile(self, key: int | str) -> Profile:
        """Fetch a profile by numeric id or by handle.

        Args:
            key: Profile id, or handle when the id is not known.

        Returns:
            Profile: The complete profile record.

        Raises:
            ProfileNotFoundError: If the service has no such profile.
            ValidationError: If the record is malformed.
            NetworkError: On transport failure or any other non-success status.
        """
        if key is None or key == "":
            raise ValidationError("A profile id or handle is required")

        logger.info("Fetching profile", extra={"profile_id": key})
        response = await self._request("GET", f"/users/{key}")

        if response.status_code == 404:
            raise ProfileNotFoundError(
                f"Profile not found: {key}", details={"key": key}
            )
        if response.is_error:
            raise self._unexpected(response)

        try:
            return Profile.model_validate(response.json())
        except (PydanticValidationError, ValueError) as e:
            raise ValidationError(
                f"Malformed profile record for {key}", details={"key": key}
            ) from e

    async def check_following(
        self, profile_id: int, session: ViewerSession
    ) -> FollowState:
        """Ask whether the viewer follows ``profile_id``.

        A 404 from this endpoint means "not following" and is returned as
        ``FollowState.NOT_FOLLOWING`` rather than raised.

        Raises:
            LoginRequiredError: If the viewer has no access token.
            NetworkError: On transport failure or any other non-success status.
        """
        headers = self._authorization(session, "check following", profile_id)
        response = await self._request(
            "GET", f"/user/following/{profile_id}", headers=headers
        )

        if response.status_code == 404:
            logger.debug(
                "Relationship not found, viewer is not following",
                extra={"profile_id": profile_id},
            )
            return FollowState.NOT_FOLLOWING
        if response.is_error:
            raise self._unexpected(response)
        return FollowState.FOLLOWING

    async def follow(self, profile_id: int, session: ViewerSession) -> None:
        """Create the viewer's follow relationship with ``profile_id``.

        Raises:
            LoginRequiredError: If the viewer has no access token.
            NetworkError: If the service did not confirm the change.
        """
        headers = self._authorization(session, "follow", profile_id)
        response = await self._request(
            "PUT", f"/users/{profile_id}/follow", headers=headers
        )
        if response.is_error:
            raise self._unexpected(response)
        logger.info("Followed profile", extra={"profile_id": profile_id})

    async def unfollow(self, profile_id: int, session: ViewerSession) -> None:
        """Delete the viewer's follow relationship with ``profile_id``.

        Raises:
            LoginRequiredError: If the viewer has no access token.
            NetworkError: If the service did not confirm the change.
        """
        headers = self._authorization(session, "unfollow", profile_id)
        response = await self._request(
            "DELETE", f"/users/{profile_id}/follow", headers=headers
        )
        if response.is_error:
            raise self._unexpected(response)
        logger.info("Unfollowed profile", extra={"profile_id": profile_id})

    async def fetch_feed_page(
        self,
        profile_id: int,
        page: int,
        page_size: int | None = None,
    ) -> list[FeedItem]:
        """Fetch one page of a profile's feed, in service order.

        Args:
            profile_id: Owner of the feed.
            page: Page number to fetch.
            page_size: Items per page; defaults to the configured size.

        Returns:
            List[FeedItem]: The page's items, possibly empty at the end.

        Raises:
            ValidationError: If an item record is malformed.
            NetworkError: On transport failure or any non-success status.
        """
        per_page = page_size or self.settings.feed.page_size
        response = await self._request(
            "GET",
            f"/users/{profile_id}/shots",
            params={"page": page, "per_page": per_page},
        )
        if response.is_error:
            raise self._unexpected(response)

        try:
            payload = response.json()
            return [FeedItem.model_validate(record) for record in payload]
        except (PydanticValidationError, ValueError, TypeError) as e:
            raise ValidationError(
                f"Malformed feed page {page} for profile {profile_id}",
                details={"profile_id": profile_id, "page": page},
            ) from e
