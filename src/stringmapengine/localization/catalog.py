"""Locale catalog: the build-scoped table of locale metadata.

The catalog is loaded exactly once per build from a single JSON file that
maps locale codes to records::

    {
      "en": {"englishName": "English", "localizedName": "English", "direction": "ltr"},
      "es_PY": {"englishName": "Spanish (Paraguay)", "localizedName": "Español (Paraguay)",
                "direction": "ltr", "fallbackLocales": ["es"]}
    }

The set of valid locale codes is exactly the catalog keys. Invariant
violations (unknown direction, dangling fallback reference, missing base
locale) are data errors raised at construction, never silently ignored.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from stringmapengine.constants import BASE_LOCALE
from stringmapengine.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    InvalidLocaleCatalogError,
    UnknownLocaleError,
)
from stringmapengine.enums import TextDirection
from stringmapengine.locale_utils import (
    canonicalize_locale,
    get_babel_locale,
    is_valid_locale3,
    is_valid_locale_code,
)
from stringmapengine.localization.types import LocaleCode

__all__ = ["LocaleCatalog", "LocaleRecord"]

logger = logging.getLogger(__name__)


def _catalog_error(code: DiagnosticCode, message: str, *, locale: str | None = None,
                   path: str | None = None) -> InvalidLocaleCatalogError:
    return InvalidLocaleCatalogError(
        Diagnostic(code=code, message=message, locale=locale, path=path)
    )


@dataclass(frozen=True, slots=True)
class LocaleRecord:
    """Metadata for one locale.

    Attributes:
        code: Catalog key (``xx`` or ``xx_XX``)
        english_name: Name of the locale in English
        localized_name: Name of the locale in the locale itself
        direction: Text direction of the locale's script
        fallback_locales: Locales consulted after this one and before the
            base locale, in catalog order
        locale3: Optional ISO 639-2 alias accepted by locale remapping
    """

    code: LocaleCode
    english_name: str
    localized_name: str
    direction: TextDirection = TextDirection.LTR
    fallback_locales: tuple[LocaleCode, ...] = ()
    locale3: str | None = None

    @property
    def is_rtl(self) -> bool:
        """Check if the locale is written right-to-left."""
        return self.direction == TextDirection.RTL

    @classmethod
    def from_mapping(cls, code: LocaleCode, data: Mapping[str, Any]) -> LocaleRecord:
        """Build a record from one catalog file entry.

        ``displayName`` is accepted as an alias of ``englishName``.

        Args:
            code: Catalog key of the entry
            data: Entry object from the catalog file

        Returns:
            Parsed LocaleRecord

        Raises:
            InvalidLocaleCatalogError: If a field has the wrong type or the
                direction is not 'ltr' / 'rtl'
        """
        if not isinstance(data, Mapping):
            raise _catalog_error(
                DiagnosticCode.CATALOG_MALFORMED,
                f"Catalog entry must be an object, got {type(data).__name__}",
                locale=code,
            )

        english_name = data.get("englishName", data.get("displayName", code))
        localized_name = data.get("localizedName", english_name)

        raw_direction = data.get("direction", TextDirection.LTR.value)
        try:
            direction = TextDirection(raw_direction)
        except ValueError:
            raise _catalog_error(
                DiagnosticCode.CATALOG_INVALID_DIRECTION,
                f"Invalid direction {raw_direction!r}, expected 'ltr' or 'rtl'",
                locale=code,
            ) from None

        raw_fallbacks = data.get("fallbackLocales") or ()
        if not isinstance(raw_fallbacks, (list, tuple)) or not all(
            isinstance(f, str) for f in raw_fallbacks
        ):
            raise _catalog_error(
                DiagnosticCode.CATALOG_MALFORMED,
                "fallbackLocales must be a list of locale codes",
                locale=code,
            )

        locale3 = data.get("locale3")
        if locale3 is not None and not isinstance(locale3, str):
            raise _catalog_error(
                DiagnosticCode.CATALOG_MALFORMED,
                f"locale3 must be a string, got {type(locale3).__name__}",
                locale=code,
            )

        return cls(
            code=code,
            english_name=str(english_name),
            localized_name=str(localized_name),
            direction=direction,
            fallback_locales=tuple(raw_fallbacks),
            locale3=locale3,
        )

    @classmethod
    def from_babel(
        cls,
        code: LocaleCode,
        *,
        fallback_locales: Iterable[LocaleCode] = (),
    ) -> LocaleRecord:
        """Build a record from CLDR data.

        Names and direction come from Babel; fallbacks are supplied by the
        caller since CLDR has no notion of the build's fallback policy.

        Raises:
            babel.core.UnknownLocaleError: If CLDR has no data for the code
        """
        babel_locale = get_babel_locale(code)
        direction = (
            TextDirection.RTL
            if babel_locale.character_order == "right-to-left"
            else TextDirection.LTR
        )
        english_name = babel_locale.english_name or code
        return cls(
            code=code,
            english_name=english_name,
            localized_name=babel_locale.display_name or english_name,
            direction=direction,
            fallback_locales=tuple(fallback_locales),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Serialize to the catalog file entry shape."""
        result: dict[str, Any] = {
            "englishName": self.english_name,
            "localizedName": self.localized_name,
            "direction": self.direction.value,
        }
        if self.locale3 is not None:
            result["locale3"] = self.locale3
        if self.fallback_locales:
            result["fallbackLocales"] = list(self.fallback_locales)
        return result


class LocaleCatalog(Mapping[LocaleCode, LocaleRecord]):
    """Immutable table of LocaleRecords keyed by locale code.

    Iteration follows catalog file order. The base locale must be present,
    and every fallback reference must name a catalog code.

    Example:
        >>> catalog = LocaleCatalog.from_mapping({
        ...     "en": {"englishName": "English"},
        ...     "es": {"englishName": "Spanish"},
        ...     "es_PY": {"englishName": "Spanish (Paraguay)", "fallbackLocales": ["es"]},
        ... })
        >>> catalog["es_PY"].fallback_locales
        ('es',)
    """

    __slots__ = ("_base_locale", "_records")

    def __init__(
        self,
        records: Iterable[LocaleRecord],
        *,
        base_locale: LocaleCode = BASE_LOCALE,
    ) -> None:
        """Initialize and validate the catalog.

        Args:
            records: Locale records in catalog order
            base_locale: Fallback-of-last-resort locale

        Raises:
            InvalidLocaleCatalogError: If a code or locale3 is malformed, a
                fallback reference dangles, or the base locale is missing
        """
        self._records: dict[LocaleCode, LocaleRecord] = {}
        for record in records:
            if not is_valid_locale_code(record.code):
                raise _catalog_error(
                    DiagnosticCode.CATALOG_INVALID_CODE,
                    f"Invalid locale format: {record.code!r}",
                    locale=record.code,
                )
            if record.locale3 is not None and (
                not isinstance(record.locale3, str) or not is_valid_locale3(record.locale3)
            ):
                raise _catalog_error(
                    DiagnosticCode.CATALOG_INVALID_CODE,
                    f"Invalid locale3 format: {record.locale3!r}",
                    locale=record.code,
                )
            self._records[record.code] = record

        if base_locale not in self._records:
            raise _catalog_error(
                DiagnosticCode.CATALOG_MISSING_BASE,
                f"Base locale {base_locale!r} is missing from the catalog",
                locale=base_locale,
            )
        self._base_locale = base_locale

        for record in self._records.values():
            for fallback in record.fallback_locales:
                if fallback not in self._records:
                    raise _catalog_error(
                        DiagnosticCode.CATALOG_DANGLING_FALLBACK,
                        f"Fallback locale {fallback!r} of {record.code!r} is not in the catalog",
                        locale=record.code,
                    )

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Mapping[str, Any]],
        *,
        base_locale: LocaleCode = BASE_LOCALE,
    ) -> LocaleCatalog:
        """Build a catalog from the parsed catalog file object."""
        if not isinstance(data, Mapping):
            raise _catalog_error(
                DiagnosticCode.CATALOG_MALFORMED,
                f"Locale catalog must be an object, got {type(data).__name__}",
            )
        return cls(
            (LocaleRecord.from_mapping(code, entry) for code, entry in data.items()),
            base_locale=base_locale,
        )

    @classmethod
    def load(cls, path: str | Path, *, base_locale: LocaleCode = BASE_LOCALE) -> LocaleCatalog:
        """Load the catalog file verbatim.

        Raises:
            FileNotFoundError: If the catalog file does not exist
            InvalidLocaleCatalogError: If the file is not valid catalog JSON
        """
        catalog_path = Path(path)
        try:
            data = json.loads(catalog_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise _catalog_error(
                DiagnosticCode.CATALOG_MALFORMED,
                f"Locale catalog is not valid JSON: {e}",
                path=str(catalog_path),
            ) from e
        catalog = cls.from_mapping(data, base_locale=base_locale)
        logger.info("Loaded locale catalog %s: %d locales", catalog_path, len(catalog))
        return catalog

    @classmethod
    def from_babel(
        cls,
        codes: Iterable[LocaleCode],
        *,
        base_locale: LocaleCode = BASE_LOCALE,
    ) -> LocaleCatalog:
        """Generate a catalog from CLDR data.

        Each ``xx_XX`` code falls back to its bare language ``xx`` when that
        language is also requested. The base locale is always included.
        """
        code_list = list(dict.fromkeys([base_locale, *codes]))
        requested = set(code_list)
        records = []
        for code in code_list:
            language = code.split("_", 1)[0]
            fallbacks = (language,) if language != code and language in requested else ()
            records.append(LocaleRecord.from_babel(code, fallback_locales=fallbacks))
        return cls(records, base_locale=base_locale)

    def __getitem__(self, code: LocaleCode) -> LocaleRecord:
        return self._records[code]

    def __iter__(self) -> Iterator[LocaleCode]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"LocaleCatalog(base_locale={self._base_locale!r}, locales={len(self)})"

    @property
    def base_locale(self) -> LocaleCode:
        """Fallback-of-last-resort locale."""
        return self._base_locale

    def require(self, code: LocaleCode) -> LocaleRecord:
        """Get a record, failing for unknown codes.

        Raises:
            UnknownLocaleError: If the code is not in the catalog
        """
        record = self._records.get(code)
        if record is None:
            raise UnknownLocaleError(code)
        return record

    def is_rtl(self, code: LocaleCode) -> bool:
        """Check if a catalog locale is written right-to-left."""
        return self.require(code).is_rtl

    def remap(self, locale: str) -> LocaleCode:
        """Map a query-style locale to a catalog code.

        Accepts ``xx``, ``xx_XX``, ``xx-xx`` in any case and ISO 639-2
        ``xxx`` aliases (via ``locale3``). Anything that does not resolve to
        a catalog code maps to the base locale.

        Example:
            >>> catalog.remap("ES-py")
            'es_PY'
        """
        try:
            candidate = canonicalize_locale(locale)
        except ValueError:
            candidate = locale

        if len(candidate) == 3:
            for code, record in self._records.items():
                if record.locale3 == candidate:
                    candidate = code
                    break

        if candidate not in self._records:
            logger.warning(
                "Locale %r is not in the catalog, using %s", locale, self._base_locale
            )
            return self._base_locale
        return candidate

    def subset(self, codes: Iterable[LocaleCode]) -> LocaleCatalog:
        """Return a catalog restricted to the given codes, in catalog order.

        The base locale is always retained.

        Raises:
            UnknownLocaleError: If a code is not in the catalog
            InvalidLocaleCatalogError: If a retained record falls back to a
                code outside the subset
        """
        wanted = {self._base_locale}
        for code in codes:
            self.require(code)
            wanted.add(code)
        return LocaleCatalog(
            (record for code, record in self._records.items() if code in wanted),
            base_locale=self._base_locale,
        )

    def to_mapping(self) -> dict[LocaleCode, dict[str, Any]]:
        """Serialize to the catalog file object shape."""
        return {code: record.to_mapping() for code, record in self._records.items()}

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize to catalog file JSON."""
        return json.dumps(self.to_mapping(), indent=indent, ensure_ascii=False)
