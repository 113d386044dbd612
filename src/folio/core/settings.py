"""Settings management for Folio.

This module provides centralized configuration for the profile controller
using Pydantic Settings with environment variable support and validation.

The settings are organized into logical groups:
- AppSettings: Project metadata, debug mode and log location
- ServiceSettings: Remote service endpoint and transport options
- FeedSettings: Feed pagination options
- FollowSettings: Follow relationship behaviour
- DisplaySettings: Locale used when formatting counters

Example:
    Basic usage:
        from folio.core.settings import settings

        if settings.debug:
            print(f"Running {settings.project_name} v{settings.version}")

    Environment variables:
        FOLIO_DEBUG=true
        SERVICE_BASE_URL=https://api.example.com/v1
        FEED_PAGE_SIZE=24
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application level settings.

    Attributes:
        version: Application version string.
        project_name: Human-readable project name.
        debug: Enable debug mode with verbose logging.
        log_dir: Directory that receives rotating JSON log files.

    Environment Variables:
        All attributes can be configured via environment variables with
        the 'FOLIO_' prefix (e.g., FOLIO_DEBUG, FOLIO_LOG_DIR).
    """

    version: str = Field(default="1.0.0", description="Application version string")
    project_name: str = Field(default="Folio", description="Human-readable project name")
    debug: bool = Field(
        default=False, description="Enable debug mode with verbose logging"
    )
    log_dir: str = Field(default="logs", description="Directory for log files")

    model_config = SettingsConfigDict(env_prefix="FOLIO_")


class ServiceSettings(BaseSettings):
    """Remote profile service configuration settings.

    Attributes:
        base_url: Root URL of the remote service API.
        timeout: Per-request timeout in seconds.
        user_agent: HTTP User-Agent header for requests.

    Environment Variables:
        SERVICE_BASE_URL: Remote service root URL.
        SERVICE_TIMEOUT: Request timeout in seconds.
        SERVICE_USER_AGENT: Custom User-Agent header.
    """

    base_url: str = Field(
        default="https://api.dribbble.com/v1",
        description="Root URL of the remote service API",
    )
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    user_agent: str = Field(
        default="folio/1.0", description="HTTP User-Agent header for requests"
    )

    @field_validator("base_url")
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so endpoint paths can be appended directly.

        Args:
            v: The configured base URL.

        Returns:
            The base URL without a trailing slash.
        """
        return v.rstrip("/")

    @property
    def headers(self) -> dict[str, str]:
        """Default headers sent with every request."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    model_config = SettingsConfigDict(env_prefix="SERVICE_")


class FeedSettings(BaseSettings):
    """Feed pagination settings.

    Attributes:
        page_size: Number of items requested per page.
        first_page: Page number the cursor starts from.
    """

    page_size: int = Field(default=12, ge=1, le=100, description="Items per page")
    first_page: int = Field(default=1, ge=0, description="Initial page number")

    model_config = SettingsConfigDict(env_prefix="FEED_")


class FollowSettings(BaseSettings):
    """Follow relationship settings.

    Attributes:
        rollback_on_failure: Revert the optimistic state and follower counter
            when a follow/unfollow request fails. Disabled by default, which
            keeps the optimistic state in place after a failure.
    """

    rollback_on_failure: bool = Field(
        default=False, description="Revert optimistic follow state on failure"
    )

    model_config = SettingsConfigDict(env_prefix="FOLLOW_")


class DisplaySettings(BaseSettings):
    """Presentation-facing formatting settings."""

    locale: str = Field(default="en_US", description="Locale for count labels")

    model_config = SettingsConfigDict(env_prefix="DISPLAY_")


class Settings(BaseSettings):
    """Composite settings container with nested configuration groups.

    Attributes:
        app: Application level settings.
        service: Remote service settings.
        feed: Feed pagination settings.
        follow: Follow relationship settings.
        display: Formatting settings.

    Example:
        from folio.core.settings import settings

        print(f"Talking to {settings.service.base_url}")
        print(f"Fetching {settings.feed.page_size} items per page")
    """

    app: AppSettings = Field(default_factory=AppSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    follow: FollowSettings = Field(default_factory=FollowSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def debug(self) -> bool:
        """Get debug mode status from app settings."""
        return self.app.debug

    @property
    def version(self) -> str:
        """Get application version from app settings."""
        return self.app.version

    @property
    def project_name(self) -> str:
        """Get human-readable project name from app settings."""
        return self.app.project_name

    @property
    def locale(self) -> str:
        """Get formatting locale from display settings."""
        return self.display.locale

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance with environment variables loaded.

    Returns:
        Fully configured Settings instance with all nested configurations
        loaded from environment variables and defaults.
    """
    from dotenv import load_dotenv

    load_dotenv()
    return Settings()


# Global settings instance for convenient access throughout the package
settings = get_settings()
