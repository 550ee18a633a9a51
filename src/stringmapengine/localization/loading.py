"""Translation file loading infrastructure.

Provides the protocol for translation loaders, a filesystem implementation
with path-traversal security, result/summary data structures for tracking
load attempts, and the build-scoped TranslationStore cache.

Components:
    TranslationLoader - Protocol for reading raw translation files
    PathTranslationLoader - Disk-based loader with path-traversal prevention
    FallbackInfo - Fallback event passed to on_fallback callbacks
    TranslationLoadResult - Immutable result of a single load attempt
    LoadSummary - Immutable aggregate of all load attempts of a build
    TranslationStore - Parses, formats and caches tables per (module, locale)

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, TypeAlias

from stringmapengine.config import BuildConfig
from stringmapengine.constants import (
    DEFAULT_BASE_TRANSLATION_TEMPLATE,
    DEFAULT_TRANSLATION_TEMPLATE,
)
from stringmapengine.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    MalformedTranslationFileError,
    TranslationLoadError,
)
from stringmapengine.enums import LoadStatus
from stringmapengine.localization.catalog import LocaleCatalog
from stringmapengine.localization.entries import TranslationEntry, parse_string_file
from stringmapengine.localization.types import LocaleCode, OwningModule, PartialStringKey

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "TranslationLoader",
    # Concrete loader
    "PathTranslationLoader",
    # Load result types
    "FallbackInfo",
    "TranslationLoadResult",
    "LoadSummary",
    # Cache
    "TranslationStore",
]

logger = logging.getLogger(__name__)

TranslationTable: TypeAlias = Mapping[PartialStringKey, TranslationEntry]

_EMPTY_TABLE: TranslationTable = MappingProxyType({})


class TranslationLoader(Protocol):
    """Protocol for reading translation files for (module, locale) pairs.

    This is a Protocol (structural typing) rather than ABC so that build
    hosts can plug in archives, HTTP caches or in-memory fixtures.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, files):
        ...         self.files = files
        ...     def load(self, module, locale, *, is_base=False):
        ...         try:
        ...             return self.files[module, locale]
        ...         except KeyError:
        ...             raise FileNotFoundError(f"{module}/{locale}") from None
        ...     def describe_path(self, module, locale, *, is_base=False):
        ...         return f"{module}/{locale}"
    """

    def load(self, module: OwningModule, locale: LocaleCode, *, is_base: bool = False) -> str:
        """Read the raw translation file.

        Args:
            module: Owning module (e.g., 'area-builder')
            locale: Locale code (e.g., 'es_PY')
            is_base: Whether locale is the catalog's base locale

        Returns:
            File contents as text

        Raises:
            FileNotFoundError: If no file exists for this pair
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """

    def describe_path(
        self, module: OwningModule, locale: LocaleCode, *, is_base: bool = False
    ) -> str:
        """Return human-readable path for diagnostics."""
        return f"{module}/{locale}"


@dataclass(frozen=True, slots=True)
class PathTranslationLoader:
    """File system translation loader using path templates.

    Templates use ``{module}`` and ``{locale}`` placeholders relative to
    ``root_dir``. Base-locale files live beside the module while translated
    files live in a separate translation checkout, so the base locale has its
    own template. The store passes ``is_base`` from its catalog.

    Security:
        Module names and locale codes containing path separators or ".." are
        rejected. All resolved paths are validated against ``root_dir``.

    Example:
        >>> loader = PathTranslationLoader("checkout")
        >>> loader.describe_path("joist", "es")
        'checkout/babel/joist/joist-strings_es.json'
        >>> loader.describe_path("joist", "en", is_base=True)
        'checkout/joist/joist-strings_en.json'

    Attributes:
        root_dir: Directory that every template is relative to
        template: Template for translated locales
        base_template: Template for the base locale
    """

    root_dir: str
    template: str = DEFAULT_TRANSLATION_TEMPLATE
    base_template: str = DEFAULT_BASE_TRANSLATION_TEMPLATE
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory and validate templates.

        Raises:
            ValueError: If a template lacks the {locale} placeholder
        """
        for template in (self.template, self.base_template):
            if "{locale}" not in template:
                msg = f"template must contain '{{locale}}' placeholder, got: '{template}'"
                raise ValueError(msg)
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    @staticmethod
    def _validate_component(kind: str, value: str) -> None:
        if not value:
            msg = f"{kind} cannot be empty"
            raise ValueError(msg)
        if ".." in value:
            msg = f"Path traversal sequences not allowed in {kind}: '{value}'"
            raise ValueError(msg)
        if "/" in value or "\\" in value:
            msg = f"Path separators not allowed in {kind}: '{value}'"
            raise ValueError(msg)

    def _relative_path(self, module: OwningModule, locale: LocaleCode, is_base: bool) -> str:
        template = self.base_template if is_base else self.template
        # replace() rather than format() so unrelated braces survive
        return template.replace("{module}", module).replace("{locale}", locale)

    def describe_path(
        self, module: OwningModule, locale: LocaleCode, *, is_base: bool = False
    ) -> str:
        """Return the template-substituted path."""
        return f"{self.root_dir.rstrip('/')}/{self._relative_path(module, locale, is_base)}"

    def load(self, module: OwningModule, locale: LocaleCode, *, is_base: bool = False) -> str:
        """Read a translation file from disk.

        Raises:
            ValueError: If module or locale contains path traversal sequences
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        self._validate_component("module", module)
        self._validate_component("locale", locale)

        full_path = (self._resolved_root / self._relative_path(module, locale, is_base)).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"module='{module}', locale='{locale}'"
            )
            raise ValueError(msg) from None

        return full_path.read_text(encoding="utf-8")


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when a build resolves a key from a
    locale later in the chain than the requested one.

    Attributes:
        requested_locale: The build locale being resolved
        resolved_locale: The locale that actually contained the key
        module: Owning module of the key
        key: Partial string key that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.module} {info.key} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    module: OwningModule
    key: PartialStringKey


@dataclass(frozen=True, slots=True)
class TranslationLoadResult:
    """Result of loading a single translation file.

    Attributes:
        module: Owning module of the file
        locale: Locale code of the file
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable path to the file (if available)
        entry_count: Number of string entries parsed
    """

    module: OwningModule
    locale: LocaleCode
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None
    entry_count: int = 0

    @property
    def is_success(self) -> bool:
        """Check if the file loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the file was absent (expected for untranslated locales)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the load failed with an error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of translation load results.

    All statistics are computed properties derived from ``results``.

    Example:
        >>> summary = store.get_load_summary()
        >>> for result in summary.get_not_found():
        ...     print(f"Untranslated: {result.module}/{result.locale}")
    """

    results: tuple[TranslationLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of absent files."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        """Check if any file failed to load."""
        return self.errors > 0

    def get_errors(self) -> tuple[TranslationLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[TranslationLoadResult, ...]:
        """Get all results where the file was absent."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[TranslationLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_locale(self, locale: LocaleCode) -> tuple[TranslationLoadResult, ...]:
        """Get all results for a specific locale."""
        return tuple(r for r in self.results if r.locale == locale)

    def get_by_module(self, module: OwningModule) -> tuple[TranslationLoadResult, ...]:
        """Get all results for a specific module."""
        return tuple(r for r in self.results if r.module == module)


class TranslationStore:
    """Build-scoped cache of parsed translation tables.

    Each (module, locale) file is read at most once per store. A store is
    owned by one build and is not safe for concurrent writers; create one
    per build rather than sharing it.

    Example:
        >>> store = TranslationStore(catalog, PathTranslationLoader("checkout"))
        >>> store.load("joist", "es")["title"].value
        '\\u202aTítulo\\u202c'
    """

    __slots__ = ("_cache", "_catalog", "_config", "_loader", "_results")

    def __init__(
        self,
        catalog: LocaleCatalog,
        loader: TranslationLoader,
        config: BuildConfig | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            catalog: Locale catalog supplying text direction
            loader: Source of raw translation files
            config: Build configuration (default: ``BuildConfig()``)
        """
        self._catalog = catalog
        self._loader = loader
        self._config = config if config is not None else BuildConfig()
        self._cache: dict[tuple[OwningModule, LocaleCode], TranslationTable] = {}
        self._results: list[TranslationLoadResult] = []

    def load(self, module: OwningModule, locale: LocaleCode) -> TranslationTable:
        """Get the formatted translation table for a (module, locale) pair.

        Args:
            module: Owning module
            locale: Catalog locale code

        Returns:
            Read-only mapping of partial key to entry; empty if the file is absent

        Raises:
            UnknownLocaleError: If the locale is not in the catalog
            MalformedTranslationFileError: If the file is not valid string data
            TranslationLoadError: If the file exists but cannot be read
        """
        cache_key = (module, locale)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        record = self._catalog.require(locale)
        is_base = locale == self._catalog.base_locale
        source_path = self._loader.describe_path(module, locale, is_base=is_base)

        try:
            text = self._loader.load(module, locale, is_base=is_base)
        except FileNotFoundError:
            logger.debug("Missing string file: %s", source_path)
            self._results.append(
                TranslationLoadResult(module, locale, LoadStatus.NOT_FOUND, source_path=source_path)
            )
            self._cache[cache_key] = _EMPTY_TABLE
            return _EMPTY_TABLE
        except UnicodeDecodeError as e:
            raise self._malformed(module, locale, source_path, e) from e
        except (OSError, ValueError) as e:
            self._record_error(module, locale, source_path, e)
            diagnostic = Diagnostic(
                code=DiagnosticCode.TRANSLATION_FILE_UNREADABLE,
                message=f"Cannot read string file: {e}",
                module=module,
                locale=locale,
                path=source_path,
            )
            raise TranslationLoadError(
                diagnostic, module=module, locale=locale, path=source_path
            ) from e

        try:
            entries = parse_string_file(
                json.loads(text), is_rtl=record.is_rtl, trim=self._config.trim_values
            )
        except (json.JSONDecodeError, TypeError) as e:
            raise self._malformed(module, locale, source_path, e) from e

        table = MappingProxyType(entries)
        self._results.append(
            TranslationLoadResult(
                module,
                locale,
                LoadStatus.SUCCESS,
                source_path=source_path,
                entry_count=len(table),
            )
        )
        logger.debug("Loaded %d strings from %s", len(table), source_path)
        self._cache[cache_key] = table
        return table

    def _record_error(
        self, module: OwningModule, locale: LocaleCode, source_path: str, error: Exception
    ) -> None:
        self._results.append(
            TranslationLoadResult(
                module, locale, LoadStatus.ERROR, error=error, source_path=source_path
            )
        )

    def _malformed(
        self, module: OwningModule, locale: LocaleCode, source_path: str, error: Exception
    ) -> MalformedTranslationFileError:
        """Record a failed parse and build the error to raise.

        Undecodable bytes, invalid JSON and wrong document shapes all count as
        malformed files.
        """
        self._record_error(module, locale, source_path, error)
        diagnostic = Diagnostic(
            code=DiagnosticCode.TRANSLATION_FILE_MALFORMED,
            message=f"Malformed string file: {error}",
            module=module,
            locale=locale,
            path=source_path,
        )
        return MalformedTranslationFileError(
            diagnostic, module=module, locale=locale, path=source_path
        )

    def discover_locales(self, module: OwningModule) -> tuple[LocaleCode, ...]:
        """Probe every catalog locale for a non-empty file of a module.

        Returns:
            Locales with at least one string entry, in catalog order,
            excluding the base locale
        """
        base = self._catalog.base_locale
        return tuple(
            locale
            for locale in self._catalog
            if locale != base and self.load(module, locale)
        )

    def translated_locales(
        self, modules: Iterable[OwningModule] | None = None
    ) -> tuple[LocaleCode, ...]:
        """Locales with at least one real translation among loaded files.

        Only files already loaded are considered. The base locale is
        excluded since it is not a translation.

        Args:
            modules: Restrict to these modules (default: all loaded modules)

        Returns:
            Sorted locale codes
        """
        wanted = None if modules is None else set(modules)
        base = self._catalog.base_locale
        return tuple(sorted({
            locale
            for (module, locale), table in self._cache.items()
            if table and locale != base and (wanted is None or module in wanted)
        }))

    def get_load_summary(self) -> LoadSummary:
        """Get summary of every load attempt made through this store."""
        return LoadSummary(results=tuple(self._results))
