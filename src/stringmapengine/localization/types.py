"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating build call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "FullStringKey",
    "LocaleCode",
    "MetadataValue",
    "OwningModule",
    "PartialStringKey",
    "StringMap",
    "StringMetadata",
]

LocaleCode: TypeAlias = str
"""Catalog locale code (e.g., 'en', 'es_PY', 'zh_CN')."""

OwningModule: TypeAlias = str
"""Kebab-case name of a module declaring translatable strings (e.g., 'area-builder')."""

PartialStringKey: TypeAlias = str
"""Dotted key beneath a module namespace (e.g., 'resetAllButton.label')."""

FullStringKey: TypeAlias = str
"""Namespace-qualified key (e.g., 'AREA_BUILDER/resetAllButton.label')."""

MetadataValue: TypeAlias = bool | str | int | float
"""Scalar authoring metadata value attached to a base-locale entry."""

StringMap: TypeAlias = dict[LocaleCode, dict[FullStringKey, str]]
"""Final string values per build locale."""

StringMetadata: TypeAlias = dict[FullStringKey, Mapping[str, MetadataValue]]
"""Authoring metadata per full key, taken from base-locale entries only."""
