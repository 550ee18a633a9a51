"""Shared constants for StringMapEngine.

Centralizes the conventions shared by the catalog, extraction, loading and
build layers. Placing them here avoids circular imports and provides a single
source of truth.

Constants are grouped by domain:
- Locales: the base (fallback-of-last-resort) locale
- Keys: namespace divider, accessibility marker, excluded partial keys
- Extraction: string module naming and the observable wrapper suffix
- Formatting: Unicode directional formatting characters
- Files: translation file naming templates

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locales
    "BASE_LOCALE",
    # Keys
    "NAMESPACE_DIVIDER",
    "A11Y_MARKER",
    "EXCLUDED_PARTIAL_KEYS",
    # Extraction
    "STRINGS_MODULE_SUFFIX",
    "WRAPPER_SUFFIX",
    # Formatting
    "LTR_EMBEDDING",
    "RTL_EMBEDDING",
    "POP_DIRECTIONAL_FORMATTING",
    # Files
    "DEFAULT_TRANSLATION_TEMPLATE",
    "DEFAULT_BASE_TRANSLATION_TEMPLATE",
]

# ============================================================================
# LOCALES
# ============================================================================

BASE_LOCALE: str = "en"
"""Locale that every fallback chain terminates at. Assumed complete."""

# ============================================================================
# KEYS
# ============================================================================

NAMESPACE_DIVIDER: str = "/"
"""Separates the module namespace from the partial key: ``JOIST/title``."""

A11Y_MARKER: str = "a11y."
"""Prefix of accessibility keys, the only keys allowed to nest in files."""

EXCLUDED_PARTIAL_KEYS: frozenset[str] = frozenset({"js"})
"""Partial keys discarded after extraction.

``XStrings.js`` appears inside compiled import paths and would otherwise be
picked up as a string access.
"""

# ============================================================================
# EXTRACTION
# ============================================================================

STRINGS_MODULE_SUFFIX: str = "Strings"
"""Suffix of a module's string namespace identifier: ``JoistStrings``."""

WRAPPER_SUFFIX: str = "StringProperty"
"""Suffix marking an access to the live observable wrapper of a string."""

# ============================================================================
# FORMATTING
# ============================================================================

LTR_EMBEDDING: str = "\u202a"
"""Left-to-right embedding (LRE)."""

RTL_EMBEDDING: str = "\u202b"
"""Right-to-left embedding (RLE)."""

POP_DIRECTIONAL_FORMATTING: str = "\u202c"
"""Pop directional formatting (PDF), closes an embedding."""

# ============================================================================
# FILES
# ============================================================================

DEFAULT_TRANSLATION_TEMPLATE: str = "babel/{module}/{module}-strings_{locale}.json"
"""Location of translated string files, relative to the checkout root."""

DEFAULT_BASE_TRANSLATION_TEMPLATE: str = "{module}/{module}-strings_{locale}.json"
"""Location of base-locale string files, which live beside the module."""
