"""Locale metadata pruning.

A build ships locale metadata only for the locales it can actually display,
but every shipped locale's fallback chain must stay satisfiable. The pruned
set is computed as a closure over the catalog:

1. Seed with the base locale and the translated locales.
2. Add every catalog locale that falls back to a seed locale, since the
   runtime may select it and render it through that fallback.
3. Repeatedly add the fallback locales of every member until a pass adds
   nothing.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from stringmapengine.localization.catalog import LocaleCatalog
from stringmapengine.localization.types import LocaleCode

__all__ = ["LocaleDataPruner"]

logger = logging.getLogger(__name__)


class LocaleDataPruner:
    """Compute the locale metadata a build must ship.

    Example:
        >>> pruner = LocaleDataPruner(catalog)
        >>> sorted(pruner.prune(["es"]))
        ['en', 'es', 'es_PY']
    """

    __slots__ = ("catalog",)

    def __init__(self, catalog: LocaleCatalog) -> None:
        self.catalog = catalog

    def prune(self, translated_locales: Iterable[LocaleCode]) -> frozenset[LocaleCode]:
        """Compute the closed locale set for a group of translated locales.

        Args:
            translated_locales: Locales with real translations in the build

        Returns:
            Closed set of locale codes, always containing the base locale

        Raises:
            UnknownLocaleError: If a translated locale is not in the catalog
        """
        seed = {self.catalog.base_locale}
        for locale in translated_locales:
            self.catalog.require(locale)
            seed.add(locale)

        included = set(seed)
        for code, record in self.catalog.items():
            if not seed.isdisjoint(record.fallback_locales):
                included.add(code)

        while True:
            additions = {
                fallback
                for code in included
                for fallback in self.catalog[code].fallback_locales
            } - included
            if not additions:
                break
            included |= additions

        logger.debug("Pruned locale data to %d of %d locales", len(included), len(self.catalog))
        return frozenset(included)

    def pruned_catalog(self, translated_locales: Iterable[LocaleCode]) -> LocaleCatalog:
        """Get the sub-catalog of the pruned locale set, in catalog order."""
        return self.catalog.subset(self.prune(translated_locales))
