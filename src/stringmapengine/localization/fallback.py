"""Fallback chains from a locale toward the base locale.

For a given locale, the chain is the ordered list of catalog locales consulted
when resolving a string, e.g. with ``ar_AE`` falling back to ``ar`` and
``ar_MA``::

    'ar_AE' => ('ar_AE', 'ar', 'ar_MA', 'en')
    'es'    => ('es', 'en')
    'en'    => ('en',)

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable

from stringmapengine.localization.catalog import LocaleCatalog
from stringmapengine.localization.types import LocaleCode

__all__ = ["FallbackResolver"]


class FallbackResolver:
    """Compute fallback chains over a LocaleCatalog.

    Chains are memoized; the catalog is immutable for the resolver's lifetime.

    Attributes:
        catalog: Locale catalog consulted for fallback locales
    """

    __slots__ = ("_chains", "catalog")

    def __init__(self, catalog: LocaleCatalog) -> None:
        self.catalog = catalog
        self._chains: dict[LocaleCode, tuple[LocaleCode, ...]] = {}

    @property
    def base_locale(self) -> LocaleCode:
        """Locale every chain terminates at."""
        return self.catalog.base_locale

    def resolve(self, locale: LocaleCode) -> tuple[LocaleCode, ...]:
        """Get the fallback chain for a locale.

        The chain starts at ``locale`` (omitted when it is the base locale),
        continues with the record's fallback locales in catalog order and
        always ends at the base locale. Duplicates are removed keeping the
        first occurrence.

        Args:
            locale: Catalog locale code

        Returns:
            Ordered, duplicate-free chain ending at the base locale

        Raises:
            UnknownLocaleError: If the locale is not in the catalog
        """
        chain = self._chains.get(locale)
        if chain is not None:
            return chain

        record = self.catalog.require(locale)
        base = self.catalog.base_locale
        head = [] if locale == base else [locale, *record.fallback_locales]
        # The base locale is forced to the end even if a fallback list names it.
        chain = (*dict.fromkeys(code for code in head if code != base), base)
        self._chains[locale] = chain
        return chain

    def validate(self, locales: Iterable[LocaleCode]) -> tuple[LocaleCode, ...]:
        """Check a build-locale selection before any work is done.

        Returns:
            The locales, de-duplicated in input order

        Raises:
            UnknownLocaleError: On the first locale absent from the catalog
        """
        validated = tuple(dict.fromkeys(locales))
        for locale in validated:
            self.resolve(locale)
        return validated
