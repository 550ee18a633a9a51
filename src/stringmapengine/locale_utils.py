"""Locale utilities for code normalization and CLDR lookups.

Centralizes locale format handling used throughout the codebase. Catalog
keys use the POSIX-like ``xx`` / ``xx_XX`` form; everything entering the
engine from query strings or command lines is canonicalized here first.

Python 3.13+.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING

from babel.core import parse_locale

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "canonicalize_locale",
    "clear_locale_cache",
    "get_babel_locale",
    "is_valid_locale3",
    "is_valid_locale_code",
    "normalize_locale",
]

_PAIR_PATTERN = re.compile(r"^[a-zA-Z]{2}$")
_TRIPLE_PATTERN = re.compile(r"^[a-zA-Z]{3}$")
_DOUBLE_PAIR_PATTERN = re.compile(r"^[a-zA-Z]{2}[_-][a-zA-Z]{2}$")


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to POSIX separators.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        Code with underscores (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


def canonicalize_locale(locale_code: str) -> str:
    """Canonicalize case and separators of a locale code.

    Uses Babel's identifier parser, so the language is lowercased and the
    territory uppercased: ``"EN-us"`` becomes ``"en_US"``. Script and variant
    subtags are dropped since catalog keys never carry them.

    Args:
        locale_code: Locale code in any common spelling

    Returns:
        Canonical ``xx`` / ``xx_XX`` / ``xxx`` code

    Raises:
        ValueError: If the code is not a parseable locale identifier
    """
    language, territory, *_ = parse_locale(normalize_locale(locale_code))
    return f"{language}_{territory}" if territory else language


def is_valid_locale_code(locale_code: str) -> bool:
    """Check that a catalog key has the ``xx`` or ``xx_XX`` shape."""
    return bool(_PAIR_PATTERN.match(locale_code) or _DOUBLE_PAIR_PATTERN.match(locale_code))


def is_valid_locale3(locale3: str) -> bool:
    """Check that an ISO 639-2 alias has the ``xxx`` shape."""
    return bool(_TRIPLE_PATTERN.match(locale3))


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If CLDR has no data for the locale
        ValueError: If locale format is invalid

    Example:
        >>> get_babel_locale("ar").character_order
        'right-to-left'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the cached Babel Locale objects."""
    get_babel_locale.cache_clear()
