"""String map assembly.

Resolves, for every build locale and every referenced key, the final string
value by walking the locale's fallback chain through the TranslationStore.
The first locale in the chain whose table has the key is authoritative; its
entry supplies the value and, when it is the base locale, the metadata.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from stringmapengine.analysis.extraction import StringKeyExtractor
from stringmapengine.analysis.modules import StringModule
from stringmapengine.config import BuildConfig
from stringmapengine.constants import A11Y_MARKER, NAMESPACE_DIVIDER
from stringmapengine.diagnostics import InvalidStringEntryError, MissingStringEntryError
from stringmapengine.localization.entries import TranslationEntry
from stringmapengine.localization.fallback import FallbackResolver
from stringmapengine.localization.loading import FallbackInfo, TranslationStore
from stringmapengine.localization.types import (
    FullStringKey,
    LocaleCode,
    OwningModule,
    PartialStringKey,
    StringMap,
    StringMetadata,
)

__all__ = ["StringMapBuilder", "StringMapResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StringMapResult:
    """Output of one string map build.

    Attributes:
        string_map: Locale to (full key to value); every build locale present
        string_metadata: Full key to metadata of its base-locale entry
        referenced_keys: Module to the partial keys extracted for it
    """

    string_map: StringMap
    string_metadata: StringMetadata
    referenced_keys: dict[OwningModule, frozenset[PartialStringKey]]

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales present in the map, in build order."""
        return tuple(self.string_map)


class StringMapBuilder:
    """Build the flat string map for a set of modules and locales.

    Example:
        >>> builder = StringMapBuilder(FallbackResolver(catalog), store, source_texts)
        >>> result = builder.build([StringModule("joist")], ["en", "es"])
        >>> result.string_map["es"]["JOIST/title"]
        '\\u202aTítulo\\u202c'
    """

    __slots__ = ("_config", "_extractor", "_on_fallback", "_resolver", "_source_texts", "_store")

    def __init__(
        self,
        resolver: FallbackResolver,
        store: TranslationStore,
        source_texts: Iterable[str],
        *,
        config: BuildConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            resolver: Fallback chains over the build's catalog
            store: Translation tables of this build
            source_texts: Generated source texts to extract keys from
            config: Build configuration (default: ``BuildConfig()``)
            on_fallback: Optional callback invoked whenever a value comes
                from a locale other than the requested one
        """
        self._resolver = resolver
        self._store = store
        self._source_texts = tuple(source_texts)
        self._config = config if config is not None else BuildConfig()
        self._extractor = StringKeyExtractor.from_config(self._config)
        self._on_fallback = on_fallback

    def _resolve_entry(
        self,
        module: StringModule,
        key: PartialStringKey,
        chain: tuple[LocaleCode, ...],
    ) -> tuple[LocaleCode, TranslationEntry]:
        for locale in chain:
            entry = self._store.load(module.name, locale).get(key)
            if entry is not None:
                if self._config.strict_nesting and entry.nested and not key.startswith(A11Y_MARKER):
                    raise InvalidStringEntryError(module.name, key)
                return locale, entry
        raise MissingStringEntryError(module.name, key, chain)

    def build(
        self,
        modules: Iterable[StringModule],
        build_locales: Iterable[LocaleCode],
    ) -> StringMapResult:
        """Resolve every referenced key for every build locale.

        Args:
            modules: String modules participating in the build
            build_locales: Locales to produce maps for

        Returns:
            StringMapResult with one map per build locale

        Raises:
            UnknownLocaleError: If a build locale is not in the catalog
                (checked before any file is read)
            MissingStringEntryError: If no locale in a chain defines a key
            InvalidStringEntryError: If strict nesting rejects an entry
            TranslationLoadError: If a translation file cannot be loaded
        """
        locales = self._resolver.validate(build_locales)
        module_list = sorted({m.name: m for m in modules}.values(), key=lambda m: m.name)
        referenced = self._extractor.extract(
            self._source_texts, {m.name: m.prefix for m in module_list}
        )

        base = self._resolver.base_locale
        wrapper = self._config.wrapper
        string_map: StringMap = {}
        string_metadata: StringMetadata = {}

        for locale in locales:
            chain = self._resolver.resolve(locale)
            locale_map: dict[FullStringKey, str] = {}
            for module in module_list:
                for key in sorted(referenced[module.name]):
                    if wrapper.is_wrapper(key):
                        continue
                    resolved, entry = self._resolve_entry(module, key, chain)
                    full_key = f"{module.namespace}{NAMESPACE_DIVIDER}{key}"
                    locale_map[full_key] = entry.value
                    if resolved == base and entry.metadata is not None:
                        string_metadata[full_key] = dict(entry.metadata)
                    if resolved != locale and self._on_fallback is not None:
                        self._on_fallback(FallbackInfo(locale, resolved, module.name, key))
            string_map[locale] = locale_map

        logger.info(
            "Built string map: %d locales, %d modules, %d keys",
            len(string_map),
            len(module_list),
            sum(len(keys) for keys in referenced.values()),
        )
        return StringMapResult(
            string_map=string_map,
            string_metadata=string_metadata,
            referenced_keys=referenced,
        )
