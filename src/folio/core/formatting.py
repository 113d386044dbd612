"""Locale-aware count labels ("1 follower", "1,204 followers")."""

from babel import Locale
from babel.numbers import format_decimal

from .settings import settings

NOUNS: dict[str, tuple[str, str]] = {
    "shot": ("shot", "shots"),
    "follower": ("follower", "followers"),
    "like": ("like", "likes"),
}


def format_count(count: int, noun: str, locale: str | None = None) -> str:
    """Format ``count`` with its noun pluralized by the locale's rules.

    Args:
        count: The value to display.
        noun: Key into ``NOUNS``.
        locale: Locale identifier; defaults to ``DISPLAY_LOCALE``.

    Raises:
        KeyError: If ``noun`` is unknown.
    """
    singular, plural = NOUNS[noun]
    parsed = Locale.parse(locale or settings.locale)
    word = singular if parsed.plural_form(abs(count)) == "one" else plural
    return f"{format_decimal(count, locale=parsed)} {word}"
