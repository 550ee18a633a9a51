"""StringMapEngine - localization resolution for multi-locale build pipelines.

Resolves the strings a build references into per-locale string maps,
honoring locale fallback chains, and computes the locale metadata that must
ship with the build.

Public API:
    build_localization - One-call build returning LocalizationArtifacts
    LocaleCatalog - Build-scoped table of locale metadata
    FallbackResolver - Ordered fallback chains toward the base locale
    StringKeyExtractor - Static discovery of referenced string keys
    TranslationStore - Cached per-(module, locale) translation tables
    PathTranslationLoader - Filesystem translation loader
    StringMapBuilder - String map and metadata assembly
    LocaleDataPruner - Locale metadata closure
    StringModule - A module declaring translatable strings
    BuildConfig - Build configuration

Exceptions:
    StringMapError - Base exception class
    UnknownLocaleError - Locale absent from the catalog
    MissingStringEntryError - Referenced key defined nowhere in its chain
    MalformedTranslationFileError - Translation file is not valid string data

Submodules:
    stringmapengine.localization - Catalog, fallback, loading, building, pruning
    stringmapengine.analysis - Key extraction, module naming, usage reporting
    stringmapengine.diagnostics - Error types and structured diagnostics
"""

# Essential Public API - Minimal exports for clean namespace
from .analysis import StringKeyExtractor, StringModule
from .config import BuildConfig
from .diagnostics import (
    MalformedTranslationFileError,
    MissingStringEntryError,
    StringMapError,
    UnknownLocaleError,
)
from .localization import (
    FallbackResolver,
    LocaleCatalog,
    LocaleDataPruner,
    PathTranslationLoader,
    StringMapBuilder,
    TranslationStore,
)
from .pipeline import LocalizationArtifacts, build_localization

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("stringmapengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BuildConfig",
    "FallbackResolver",
    "LocaleCatalog",
    "LocaleDataPruner",
    "LocalizationArtifacts",
    "MalformedTranslationFileError",
    "MissingStringEntryError",
    "PathTranslationLoader",
    "StringKeyExtractor",
    "StringMapBuilder",
    "StringMapError",
    "StringModule",
    "TranslationStore",
    "UnknownLocaleError",
    "__version__",
    "build_localization",
]
