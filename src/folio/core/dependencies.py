"""Dependency wiring for Folio.

This module implements a small service container that owns the one
RemoteProfileClient shared by every profile controller the host creates.
The client is built lazily from the current settings. The viewer session
belongs to the container and is handed to every controller it creates.

Example:
    Building controllers that share one client:
        from folio.core.dependencies import get_service_container

        container = get_service_container()
        container.initialize(session=ViewerSession(user_id=7, access_token="t"))

        controller = container.create_profile_controller(listener=my_view)
        controller.initialize(id=42, name="Simon")
"""

from functools import lru_cache
from typing import Any

from folio.core.auth import ANONYMOUS, ViewerSession
from folio.core.logging import ContextLogger
from folio.core.settings import Settings, settings
from folio.services.client import RemoteProfileClient
from folio.services.controller import ProfileController
from folio.services.events import ProfileListener

logger = ContextLogger(__name__)


class ServiceContainer:
    """Service container for the shared client and controller factory.

    Attributes:
        _services: Internal dictionary storing initialized service instances.
        _initialized: Flag indicating whether the container has been initialized.
    """

    def __init__(self, settings: Settings = settings) -> None:
        self._settings = settings
        self._services: dict[str, Any] = {}
        self._initialized = False
        self._session: ViewerSession = ANONYMOUS

    def initialize(self, session: ViewerSession | None = None) -> None:
        """Build the shared client and remember the viewer ``session``.

        Idempotent: once initialized, later calls have no effect until
        ``aclose`` resets the container.
        """
        if self._initialized:
            return

        self._session = session or ANONYMOUS
        self._services["profile_client"] = RemoteProfileClient(settings=self._settings)
        self._initialized = True
        logger.info(
            "Service container initialized",
            extra={"logged_in": self._session.is_logged_in},
        )

    @property
    def session(self) -> ViewerSession:
        return self._session

    @property
    def profile_client(self) -> RemoteProfileClient:
        """Get the shared RemoteProfileClient instance."""
        if not self._initialized:
            self.initialize()
        return self._services["profile_client"]

    def create_profile_controller(
        self, listener: ProfileListener | None = None
    ) -> ProfileController:
        """Create a controller bound to the shared client and session."""
        return ProfileController(
            self.profile_client,
            session=self._session,
            listener=listener,
            settings=self._settings,
        )

    async def aclose(self) -> None:
        """Close the shared client and forget it."""
        client = self._services.pop("profile_client", None)
        if client is not None:
            await client.aclose()
        self._initialized = False


@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get the process-wide service container."""
    return ServiceContainer()
