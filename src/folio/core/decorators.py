from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any, Generic, TypeVar

from .exceptions import FolioError, NotFoundError, ServiceError
from .logging import ContextLogger

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one issued remote call: either a value or a typed error."""

    value: T | None = None
    error: FolioError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def handle_errors(
    logger: ContextLogger | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[Outcome[T]]]]:
    """
    Decorator turning an async remote call into an ``Outcome``.

    Folio errors become ``Outcome.error``; anything unexpected is wrapped in
    a ``ServiceError`` so nothing escapes to the event loop.

    Args:
        logger: Optional logger instance
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[Outcome[T]]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Outcome[T]:
            try:
                return Outcome(value=await func(*args, **kwargs))
            except FolioError as e:
                if logger:
                    log = logger.info if isinstance(e, NotFoundError) else logger.warning
                    log(
                        f"{type(e).__name__}: {e.message}",
                        extra={"error_code": e.error_code, "details": e.details},
                    )
                return Outcome(error=e)
            except Exception as e:
                if logger:
                    logger.exception(f"Unexpected error: {str(e)}")
                return Outcome(
                    error=ServiceError(f"Unexpected error: {str(e)}", details={"type": type(e).__name__})
                )

        return wrapper

    return decorator
