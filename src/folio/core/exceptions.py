"""Unified exception hierarchy for Folio."""

from typing import Any


class FolioError(Exception):
    """Base exception for all Folio errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class NotFoundError(FolioError):
    """Base exception for resource not found errors."""

    pass


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    pass


class ServiceError(FolioError):
    """Base exception for remote service errors."""

    pass


class NetworkError(ServiceError):
    """Transport failure, timeout or unexpected server response."""

    pass


class ValidationError(FolioError):
    """Malformed identity or payload."""

    pass


class AuthenticationError(FolioError):
    """Authentication failed."""

    pass


class LoginRequiredError(AuthenticationError):
    """Operation requires a logged in viewer."""

    pass
