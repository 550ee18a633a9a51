"""Translation entries and string file normalization.

A translation file maps keys to entry objects. Keys may be flat dotted paths
or nested objects (used by the ``a11y.`` namespace)::

    {
      "title": {"value": "Area Builder", "metadata": {"phetioReadOnly": true}},
      "a11y": {"grid": {"label": {"value": "Grid"}}}
    }

Parsing flattens this into ``{partial key -> TranslationEntry}`` after
trimming every value and wrapping it in Unicode embedding marks for the
locale's direction.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from stringmapengine.constants import (
    LTR_EMBEDDING,
    POP_DIRECTIONAL_FORMATTING,
    RTL_EMBEDDING,
)
from stringmapengine.localization.types import MetadataValue, PartialStringKey

__all__ = [
    "TranslationEntry",
    "add_directional_formatting",
    "iter_string_entries",
    "parse_string_file",
]

_VALUE_FIELD = "value"
_METADATA_FIELD = "metadata"


@dataclass(frozen=True, slots=True)
class TranslationEntry:
    """One string value with optional authoring metadata.

    Attributes:
        value: String value (may be empty; an empty value is still an entry)
        metadata: Authoring metadata, present only where the file declares it
        nested: True if the key is only reachable through nested objects
    """

    value: str
    metadata: Mapping[str, MetadataValue] | None = None
    nested: bool = False


def add_directional_formatting(text: str, *, is_rtl: bool) -> str:
    """Pad a value with Unicode embedding marks.

    Empty strings are returned unchanged.

    Example:
        >>> add_directional_formatting("abc", is_rtl=False) == "\\u202aabc\\u202c"
        True
    """
    if not text:
        return text
    return f"{RTL_EMBEDDING if is_rtl else LTR_EMBEDDING}{text}{POP_DIRECTIONAL_FORMATTING}"


def iter_string_entries(
    data: Mapping[str, Any],
    key_so_far: str = "",
    depth: int = 0,
) -> Iterator[tuple[PartialStringKey, Mapping[str, Any], int]]:
    """Walk a string file tree, yielding every object with a ``value`` field.

    Non-object children (history arrays, scalars) are skipped. Metadata
    objects are not descended into.

    Yields:
        (dotted key, entry object, nesting depth) tuples; depth 0 means the
        key is a literal key of the file's root object
    """
    for key, child in data.items():
        if not isinstance(child, Mapping):
            continue
        next_key = f"{key_so_far}.{key}" if key_so_far else key
        if _VALUE_FIELD in child:
            yield next_key, child, depth
        if key != _VALUE_FIELD:
            yield from iter_string_entries(
                {k: v for k, v in child.items() if k != _METADATA_FIELD},
                next_key,
                depth + 1,
            )


def parse_string_file(
    data: Any,
    *,
    is_rtl: bool,
    trim: bool = True,
) -> dict[PartialStringKey, TranslationEntry]:
    """Flatten and format a parsed string file.

    A literal dotted root key takes precedence over the same path reached
    through nested objects.

    Args:
        data: Parsed JSON document
        is_rtl: Apply right-to-left rather than left-to-right embedding
        trim: Strip surrounding whitespace before formatting

    Returns:
        Mapping of partial key to formatted entry

    Raises:
        TypeError: If the document, a value or a metadata object has the
            wrong type
    """
    if not isinstance(data, Mapping):
        msg = f"string file root must be an object, got {type(data).__name__}"
        raise TypeError(msg)

    entries: dict[PartialStringKey, TranslationEntry] = {}
    for key, entry, depth in iter_string_entries(data):
        value = entry[_VALUE_FIELD]
        if not isinstance(value, str):
            msg = f"value should be a string for key {key}, got {type(value).__name__}"
            raise TypeError(msg)
        metadata = entry.get(_METADATA_FIELD)
        if metadata is not None and not isinstance(metadata, Mapping):
            msg = f"metadata should be an object for key {key}, got {type(metadata).__name__}"
            raise TypeError(msg)

        if trim:
            value = value.strip()
        formatted = TranslationEntry(
            value=add_directional_formatting(value, is_rtl=is_rtl),
            metadata=dict(metadata) if metadata is not None else None,
            nested=depth > 0,
        )
        if depth == 0:
            entries[key] = formatted
        else:
            entries.setdefault(key, formatted)
    return entries
