"""Observable wrapper conventions.

Some accesses in generated source denote the live observable wrapper of a
string (``JoistStrings.titleStringProperty.value``) rather than the string
key itself. Recognizing them is a convention of the rendering framework, so
it is expressed as a pluggable protocol instead of a hard-coded suffix.

Python 3.13+.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol

from stringmapengine.constants import WRAPPER_SUFFIX

__all__ = ["SuffixWrapperConvention", "WrapperConvention"]


class WrapperConvention(Protocol):
    """Protocol recognizing observable wrapper accesses.

    ``truncate`` runs on a raw access (prefix included, terminator removed)
    and must return an access in the same syntax. ``is_wrapper`` runs on a
    finished partial key.
    """

    def truncate(self, access: str) -> str:
        """Cut an access at the wrapper marker, dropping everything after it."""

    def is_wrapper(self, partial_key: str) -> bool:
        """Return True if the partial key denotes a wrapper access."""


@dataclass(frozen=True, slots=True)
class SuffixWrapperConvention:
    """Wrapper accesses are properties whose name ends in a fixed suffix.

    Examples with the default ``StringProperty`` suffix:
        ``X.fooStringProperty.value`` -> ``X.foo``
        ``X[ 'some-thingStringProperty' ].value`` -> ``X[ 'some-thing' ]``

    Attributes:
        suffix: Property name suffix marking the wrapper
    """

    suffix: str = WRAPPER_SUFFIX
    _bracket_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _dot_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile the truncation patterns.

        Raises:
            ValueError: If suffix is empty
        """
        if not self.suffix:
            msg = "suffix must be a non-empty string"
            raise ValueError(msg)
        escaped = re.escape(self.suffix)
        # Bracket form keeps its quote and closing bracket.
        object.__setattr__(
            self, "_bracket_pattern", re.compile(escaped + r"(['\"])(\s*)\].*", re.DOTALL)
        )
        object.__setattr__(self, "_dot_pattern", re.compile(escaped + r".*", re.DOTALL))

    def truncate(self, access: str) -> str:
        """Cut the access at the first suffix occurrence.

        Args:
            access: Raw access such as ``X[ 'aStringProperty' ].value``

        Returns:
            The access without the suffix and anything after it
        """
        access = self._bracket_pattern.sub(r"\1\2]", access, count=1)
        return self._dot_pattern.sub("", access, count=1)

    def is_wrapper(self, partial_key: str) -> bool:
        """Return True if the key ends with the suffix."""
        return partial_key.endswith(self.suffix)
