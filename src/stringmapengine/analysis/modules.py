"""String modules and their naming conventions.

A string module is the unit that owns translatable strings. Its kebab-case
name ties together the identifier generated source imports
(``AreaBuilderStrings``), the translation file names
(``area-builder-strings_es.json``) and the namespace of its full keys
(``AREA_BUILDER/title``).

Python 3.13+.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from stringmapengine.constants import STRINGS_MODULE_SUFFIX

__all__ = [
    "StringModule",
    "discover_string_modules",
    "kebab_case",
    "pascal_case",
    "upper_snake_case",
]

_IMPORT_PATTERN = re.compile(
    r"import\s+([A-Z][A-Za-z0-9]*)" + STRINGS_MODULE_SUFFIX
    + r"\s+from\s+['\"][^'\"]*?/?\1" + STRINGS_MODULE_SUFFIX + r"\.[jt]s['\"]"
)
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def pascal_case(name: str) -> str:
    """Convert a kebab-case module name to PascalCase.

    Example:
        >>> pascal_case("scenery-phet")
        'SceneryPhet'
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("-") if part)


def kebab_case(name: str) -> str:
    """Convert a PascalCase identifier to a kebab-case module name.

    Example:
        >>> kebab_case("SceneryPhet")
        'scenery-phet'
    """
    return _WORD_BOUNDARY.sub("-", name).lower()


def upper_snake_case(name: str) -> str:
    """Convert a kebab-case module name to its key namespace.

    Example:
        >>> upper_snake_case("area-builder")
        'AREA_BUILDER'
    """
    return name.replace("-", "_").upper()


@dataclass(frozen=True, slots=True)
class StringModule:
    """A module declaring translatable strings.

    Attributes:
        name: Kebab-case module name (e.g., 'area-builder')
        namespace: Namespace of full keys (default: 'AREA_BUILDER')
        prefix: Identifier that generated source accesses strings through
            (default: 'AreaBuilderStrings')
    """

    name: str
    namespace: str = ""
    prefix: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            msg = "module name cannot be empty"
            raise ValueError(msg)
        if not self.namespace:
            object.__setattr__(self, "namespace", upper_snake_case(self.name))
        if not self.prefix:
            object.__setattr__(self, "prefix", pascal_case(self.name) + STRINGS_MODULE_SUFFIX)


def discover_string_modules(source_texts: Iterable[str]) -> tuple[str, ...]:
    """Find the string modules imported by a set of source texts.

    Recognizes ``import JoistStrings from '../joist/js/JoistStrings.js';``.

    Returns:
        Sorted kebab-case module names
    """
    found: set[str] = set()
    for text in source_texts:
        found.update(kebab_case(match.group(1)) for match in _IMPORT_PATTERN.finditer(text))
    return tuple(sorted(found))
