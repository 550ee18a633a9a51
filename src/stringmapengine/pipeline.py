"""One-call localization build and the artifact assembler input contract.

``build_localization`` wires the components together for a single build:

    LocaleCatalog -> FallbackResolver -> TranslationStore
        -> StringMapBuilder -> LocaleDataPruner -> LocalizationArtifacts

The artifact assembler (bundling, HTML templating) is outside this package;
it consumes ``LocalizationArtifacts`` only.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from stringmapengine.analysis.modules import StringModule, discover_string_modules
from stringmapengine.analysis.usage import UsageReport, report_key_usage
from stringmapengine.config import BuildConfig
from stringmapengine.localization.builder import StringMapBuilder
from stringmapengine.localization.catalog import LocaleCatalog
from stringmapengine.localization.fallback import FallbackResolver
from stringmapengine.localization.loading import (
    FallbackInfo,
    LoadSummary,
    TranslationLoader,
    TranslationStore,
)
from stringmapengine.localization.pruning import LocaleDataPruner
from stringmapengine.localization.types import (
    FullStringKey,
    LocaleCode,
    StringMap,
    StringMetadata,
)

__all__ = ["ALL_LOCALES", "LocalizationArtifacts", "build_localization"]

logger = logging.getLogger(__name__)

ALL_LOCALES = "*"
"""Locale selection meaning every locale the project has translations for."""


@dataclass(frozen=True, slots=True)
class LocalizationArtifacts:
    """Everything the artifact assembler needs from a localization build.

    Attributes:
        string_map: Locale to (full key to value)
        string_metadata: Full key to base-locale metadata
        locale_data: Pruned locale catalog in catalog file shape
        locales: Target locales of the build, base locale first
        base_locale: Fallback-of-last-resort locale
        usage: Key usage diagnostics
        load_summary: Every translation file load attempt of the build
    """

    string_map: StringMap
    string_metadata: StringMetadata
    locale_data: dict[LocaleCode, dict[str, Any]]
    locales: tuple[LocaleCode, ...]
    base_locale: LocaleCode
    usage: UsageReport = field(default_factory=UsageReport)
    load_summary: LoadSummary = field(default_factory=lambda: LoadSummary(results=()))

    def strings_for(self, locale: LocaleCode) -> dict[FullStringKey, str]:
        """Get the strings of a locale, using the base map if it has none."""
        return self.string_map.get(locale) or self.string_map[self.base_locale]


def _coerce_modules(modules: Iterable[StringModule | str]) -> tuple[StringModule, ...]:
    return tuple(m if isinstance(m, StringModule) else StringModule(m) for m in modules)


def build_localization(
    source_texts: Iterable[str],
    catalog: LocaleCatalog,
    loader: TranslationLoader,
    *,
    modules: Iterable[StringModule | str] | None = None,
    locales: str | Iterable[LocaleCode] = ALL_LOCALES,
    project: str | None = None,
    config: BuildConfig | None = None,
    on_fallback: Callable[[FallbackInfo], None] | None = None,
) -> LocalizationArtifacts:
    """Run a complete localization build.

    Every locale the project has translations for is built; ``locales``
    selects the targets among them (or adds explicit ones). The base locale
    is always included.

    Args:
        source_texts: Generated source texts of the build
        catalog: Locale catalog of the build
        loader: Source of translation files
        modules: String modules (default: discovered from source imports)
        locales: ``"*"`` or an explicit list of catalog locale codes
        project: Module whose translations define the project's locales and
            whose unused keys are reported (default: every module)
        config: Build configuration (default: ``BuildConfig()``)
        on_fallback: Optional callback for fallback resolutions

    Returns:
        LocalizationArtifacts for the artifact assembler

    Raises:
        UnknownLocaleError: If an explicit locale is not in the catalog
        MissingStringEntryError: If a referenced key is defined nowhere
        TranslationLoadError: If a translation file cannot be loaded

    Example:
        >>> artifacts = build_localization(texts, catalog, PathTranslationLoader("checkout"))
        >>> artifacts.strings_for("es")["JOIST/title"]
        '\\u202aTítulo\\u202c'
    """
    config = config if config is not None else BuildConfig()
    texts = tuple(source_texts)
    module_list = _coerce_modules(
        discover_string_modules(texts) if modules is None else modules
    )
    module_names = tuple(m.name for m in module_list)
    project_modules = (project,) if project is not None else module_names

    resolver = FallbackResolver(catalog)
    base = resolver.base_locale

    if isinstance(locales, str) and locales != ALL_LOCALES:
        locales = locales.split(",")
    explicit = () if locales == ALL_LOCALES else resolver.validate(locales)

    store = TranslationStore(catalog, loader, config)
    for module in project_modules:
        store.discover_locales(module)
    project_locales = store.translated_locales(project_modules)
    all_locales = (base, *project_locales)
    targets = all_locales if locales == ALL_LOCALES else tuple(dict.fromkeys((base, *explicit)))

    builder = StringMapBuilder(resolver, store, texts, config=config, on_fallback=on_fallback)
    result = builder.build(module_list, dict.fromkeys((*all_locales, *targets)))

    usage = report_key_usage(
        {m: result.referenced_keys.get(m, frozenset()) for m in project_modules},
        {m: store.load(m, base).keys() for m in project_modules},
        wrapper=config.wrapper,
    )

    pruner = LocaleDataPruner(catalog)
    # explicit targets without translations reach the data only as reverse fallbacks
    locale_data = pruner.pruned_catalog(project_locales).to_mapping()

    summary = store.get_load_summary()
    logger.info(
        "Localization build complete: %d target locales, %d locales shipped, %s",
        len(targets),
        len(locale_data),
        summary,
    )
    return LocalizationArtifacts(
        string_map=result.string_map,
        string_metadata=result.string_metadata,
        locale_data=locale_data,
        locales=targets,
        base_locale=base,
        usage=usage,
        load_summary=summary,
    )
