"""Locale resolution and string map building.

Provides the localization stack of one build: locale catalog, fallback
chains, translation loading, string map assembly and locale data pruning.

Submodules:
    types    - PEP 695 type aliases (LocaleCode, OwningModule, StringMap, ...)
    catalog  - LocaleRecord, LocaleCatalog
    fallback - FallbackResolver
    entries  - TranslationEntry, directional formatting, file flattening
    loading  - TranslationLoader protocol, PathTranslationLoader,
               TranslationStore, FallbackInfo, TranslationLoadResult, LoadSummary
    builder  - StringMapBuilder, StringMapResult
    pruning  - LocaleDataPruner

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from stringmapengine.enums import LoadStatus, TextDirection
from stringmapengine.localization.builder import StringMapBuilder, StringMapResult
from stringmapengine.localization.catalog import LocaleCatalog, LocaleRecord
from stringmapengine.localization.entries import TranslationEntry
from stringmapengine.localization.fallback import FallbackResolver
from stringmapengine.localization.loading import (
    FallbackInfo,
    LoadSummary,
    PathTranslationLoader,
    TranslationLoader,
    TranslationLoadResult,
    TranslationStore,
)
from stringmapengine.localization.pruning import LocaleDataPruner
from stringmapengine.localization.types import (
    FullStringKey,
    LocaleCode,
    OwningModule,
    PartialStringKey,
    StringMap,
    StringMetadata,
)

__all__ = [
    # Catalog and fallback
    "LocaleCatalog",
    "LocaleRecord",
    "TextDirection",
    "FallbackResolver",
    # Loader protocol and implementations
    "TranslationLoader",
    "PathTranslationLoader",
    "TranslationStore",
    "TranslationEntry",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "TranslationLoadResult",
    # Building
    "StringMapBuilder",
    "StringMapResult",
    "FallbackInfo",
    "LocaleDataPruner",
    # Type aliases for user code type annotations
    "FullStringKey",
    "LocaleCode",
    "OwningModule",
    "PartialStringKey",
    "StringMap",
    "StringMetadata",
]
