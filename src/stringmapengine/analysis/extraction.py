"""Static discovery of referenced string keys.

Generated source accesses strings through a per-module identifier::

    import JoistStrings from './JoistStrings.js';
    JoistStrings.preferences.titleStringProperty.value
    JoistStrings[ 'some-key' ].value

Keys are recovered with a regular-expression heuristic rather than a parser.
The heuristic may over-match (an unused key costs only bytes), and each stage
below is a separate function so it can be tested on its own:

    find_raw_accesses -> strip_terminator -> WrapperConvention.truncate
        -> split_segments -> segments_to_key

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from stringmapengine.analysis.conventions import SuffixWrapperConvention, WrapperConvention
from stringmapengine.constants import EXCLUDED_PARTIAL_KEYS

if TYPE_CHECKING:
    from stringmapengine.config import BuildConfig

__all__ = [
    "StringKeyExtractor",
    "find_raw_accesses",
    "imports_prefix",
    "segments_to_key",
    "split_segments",
    "strip_terminator",
]

logger = logging.getLogger(__name__)

_ACCESS_TAIL = r"""(\.[a-zA-Z_$][a-zA-Z0-9_$]*|\[\s*['"][^'"]+['"]\s*\])+[^.\[]"""
_SEGMENT_PATTERN = re.compile(r"""\.[a-zA-Z_$][a-zA-Z0-9_$]*|\[\s*['"][^'"]+['"]\s*\]""")
_LITERAL_PATTERN = re.compile(r"""\[\s*['"]([^'"]+)['"]\s*\]""")


def imports_prefix(text: str, prefix: str) -> bool:
    """Check if a source text imports a module's string identifier."""
    return f"import {prefix} from" in text


def find_raw_accesses(text: str, prefix: str) -> list[str]:
    """Find every access chain rooted at the prefix.

    Each match ends with one extra character (anything but ``.`` or ``[``)
    that proves the chain is complete.

    Example:
        >>> find_raw_accesses("JoistStrings.a.b;", "JoistStrings")
        ['JoistStrings.a.b;']
    """
    pattern = re.compile(re.escape(prefix) + _ACCESS_TAIL)
    return [match.group(0) for match in pattern.finditer(text)]


def strip_terminator(raw_access: str) -> str:
    """Drop the terminating character of a raw access."""
    return raw_access[:-1]


def split_segments(access: str) -> list[str]:
    """Split an access (prefix already removed) into key segments.

    Dot segments lose their leading dot and bracket segments are unwrapped
    to their string literal.

    Example:
        >>> split_segments(".a[ 'b-c' ].d")
        ['a', 'b-c', 'd']
    """
    segments = []
    for token in _SEGMENT_PATTERN.findall(access):
        if token.startswith("."):
            segments.append(token[1:])
        else:
            literal = _LITERAL_PATTERN.fullmatch(token)
            if literal is not None:
                segments.append(literal.group(1))
    return segments


def segments_to_key(segments: Iterable[str]) -> str:
    """Join segments into a dotted partial key."""
    return ".".join(segments)


class StringKeyExtractor:
    """Extract referenced partial keys per module from source texts.

    Extraction is pure: the same texts and prefixes always give the same
    result, and running it on a thread pool does not change the result.

    Example:
        >>> extractor = StringKeyExtractor()
        >>> text = "import JoistStrings from './JoistStrings.js';\\n"
        >>> text += "JoistStrings.titleStringProperty.value;"
        >>> extractor.extract([text], {"joist": "JoistStrings"})
        {'joist': frozenset({'title'})}
    """

    __slots__ = ("excluded_keys", "max_workers", "wrapper")

    def __init__(
        self,
        wrapper: WrapperConvention | None = None,
        *,
        excluded_keys: Iterable[str] = EXCLUDED_PARTIAL_KEYS,
        max_workers: int = 1,
    ) -> None:
        """Initialize extractor.

        Args:
            wrapper: Wrapper convention (default: ``StringProperty`` suffix)
            excluded_keys: Partial keys discarded after extraction
            max_workers: Threads used across modules; 1 disables the pool
        """
        self.wrapper = wrapper if wrapper is not None else SuffixWrapperConvention()
        self.excluded_keys = frozenset(excluded_keys)
        self.max_workers = max_workers

    @classmethod
    def from_config(cls, config: BuildConfig) -> StringKeyExtractor:
        """Create an extractor from a build configuration."""
        return cls(
            config.wrapper,
            excluded_keys=config.excluded_keys,
            max_workers=config.max_workers,
        )

    def iter_accesses(self, text: str, prefix: str) -> Iterator[str]:
        """Yield truncated accesses with the prefix removed."""
        for raw in find_raw_accesses(text, prefix):
            access = self.wrapper.truncate(strip_terminator(raw))
            yield access[len(prefix):]

    def extract_module(self, source_texts: Iterable[str], prefix: str) -> frozenset[str]:
        """Extract the partial keys one module's prefix references.

        Texts that do not import the prefix are skipped.
        """
        accesses: set[str] = set()
        for text in source_texts:
            if imports_prefix(text, prefix):
                accesses.update(self.iter_accesses(text, prefix))

        keys = set()
        for access in sorted(accesses):
            key = segments_to_key(split_segments(access))
            if key and key not in self.excluded_keys:
                keys.add(key)
        return frozenset(keys)

    def extract(
        self,
        source_texts: Iterable[str],
        namespace_prefix_of: Mapping[str, str],
    ) -> dict[str, frozenset[str]]:
        """Extract referenced partial keys for every module.

        Args:
            source_texts: Generated source texts of the build
            namespace_prefix_of: Module name to its access prefix

        Returns:
            Module name to referenced partial keys, ordered by module name.
            Every requested module is present, possibly with no keys.
        """
        texts = tuple(source_texts)
        modules = sorted(namespace_prefix_of)

        if self.max_workers > 1 and len(modules) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(
                    lambda module: self.extract_module(texts, namespace_prefix_of[module]),
                    modules,
                ))
        else:
            results = [self.extract_module(texts, namespace_prefix_of[m]) for m in modules]

        extracted = dict(zip(modules, results, strict=True))
        for module, keys in extracted.items():
            logger.debug("Extracted %d string keys for %s", len(keys), module)
        return extracted
