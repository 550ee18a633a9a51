"""Enumerations for StringMapEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so JSON round-trips and log output
receive plain values.

Python 3.13+.
"""

from enum import StrEnum


class TextDirection(StrEnum):
    """Writing direction of a locale.

    StrEnum provides automatic string conversion: str(TextDirection.RTL) == "rtl"
    """

    LTR = "ltr"
    """Left-to-right scripts (Latin, Cyrillic, ...)."""

    RTL = "rtl"
    """Right-to-left scripts (Arabic, Hebrew, ...)."""


class LoadStatus(StrEnum):
    """Outcome of a single translation file load attempt."""

    SUCCESS = "success"
    """File found and parsed."""

    NOT_FOUND = "not_found"
    """File absent; expected for untranslated locales."""

    ERROR = "error"
    """File present but unreadable or malformed."""


class KeyUsageKind(StrEnum):
    """Kind of string key usage diagnostic."""

    UNDEFINED = "referenced-but-undefined"
    """Key extracted from source with no base-locale entry."""

    UNUSED = "defined-but-unreferenced"
    """Key defined in the base-locale file but never extracted."""


__all__ = [
    "KeyUsageKind",
    "LoadStatus",
    "TextDirection",
]
