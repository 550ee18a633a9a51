"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic record carried by every
StringMapEngine exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Locale errors (unknown codes, bad catalog data)
        2000-2999: Translation file errors (I/O, malformed data)
        3000-3999: Resolution errors (missing or invalid string entries)
        4000-4999: Usage diagnostics (non-fatal key reports)
    """

    # Locale errors (1000-1999)
    UNKNOWN_LOCALE = 1001
    CATALOG_INVALID_DIRECTION = 1002
    CATALOG_DANGLING_FALLBACK = 1003
    CATALOG_MISSING_BASE = 1004
    CATALOG_INVALID_CODE = 1005
    CATALOG_MALFORMED = 1006

    # Translation file errors (2000-2999)
    TRANSLATION_FILE_MALFORMED = 2001
    TRANSLATION_FILE_UNREADABLE = 2002

    # Resolution errors (3000-3999)
    STRING_ENTRY_MISSING = 3001
    STRING_ENTRY_NESTED = 3002

    # Usage diagnostics (4000-4999)
    KEY_UNDEFINED = 4001
    KEY_UNUSED = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Every field except ``code`` and ``message`` is optional context that
    locates the offending input.

    Attributes:
        code: Unique error code
        message: Human-readable description
        module: Owning module involved (optional)
        locale: Locale code involved (optional)
        key: Partial string key involved (optional)
        path: Translation or catalog file involved (optional)
        hint: Suggestion for fixing the problem (optional)
    """

    code: DiagnosticCode
    message: str
    module: str | None = None
    locale: str | None = None
    key: str | None = None
    path: str | None = None
    hint: str | None = None

    def format_error(self) -> str:
        """Format as a single-line error message.

        Returns:
            Message prefixed with the code name and followed by any context,
            e.g. ``STRING_ENTRY_MISSING[3001]: ... (module=joist, key=title)``

        Example:
            >>> Diagnostic(DiagnosticCode.UNKNOWN_LOCALE, "Unknown locale: 'xx'").format_error()
            "UNKNOWN_LOCALE[1001]: Unknown locale: 'xx'"
        """
        text = f"{self.code.name}[{self.code.value}]: {self.message}"

        context = [
            f"{name}={value}"
            for name, value in (
                ("module", self.module),
                ("locale", self.locale),
                ("key", self.key),
                ("path", self.path),
            )
            if value is not None
        ]
        if context:
            text += f" ({', '.join(context)})"
        if self.hint:
            text += f"\n  hint: {self.hint}"
        return text
