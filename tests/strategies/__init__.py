"""Hypothesis strategies for StringMapEngine property-based testing.

Usage:
    from tests.strategies import locale_catalogs, partial_keys
    from tests.strategies.catalog import access_spellings
"""

from .catalog import (
    access_spellings,
    catalog_with_locales,
    identifiers,
    locale_catalogs,
    partial_keys,
)

__all__ = [
    "access_spellings",
    "catalog_with_locales",
    "identifiers",
    "locale_catalogs",
    "partial_keys",
]
