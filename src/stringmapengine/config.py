"""Build configuration for StringMapEngine.

Provides a single frozen dataclass that encapsulates every knob of one
localization build. Components take the whole object rather than individual
keyword arguments so that a build is configured in exactly one place.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stringmapengine.analysis.conventions import SuffixWrapperConvention, WrapperConvention
from stringmapengine.constants import EXCLUDED_PARTIAL_KEYS

__all__ = ["BuildConfig"]


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Immutable configuration for one localization build.

    All fields have sensible defaults; ``BuildConfig()`` reproduces the
    conventional pipeline (``StringProperty`` wrappers, ``js`` excluded). The
    base locale belongs to the ``LocaleCatalog``, not to the configuration.

    Attributes:
        wrapper: Convention recognizing observable wrapper accesses
            (default: suffix ``StringProperty``).
        excluded_keys: Partial keys discarded after extraction
            (default: ``{"js"}``).
        trim_values: Strip leading/trailing whitespace from every string
            value before directional formatting (default: True).
        strict_nesting: Reject keys that are only reachable through nested
            objects outside the ``a11y.`` namespace (default: False).
        max_workers: Threads used for key extraction across modules
            (default: 1, i.e. no pool). Results are merged in module order
            regardless of this value.

    Example:
        >>> config = BuildConfig(max_workers=4)
        >>> config.wrapper.is_wrapper("titleStringProperty")
        True
    """

    wrapper: WrapperConvention = field(default_factory=SuffixWrapperConvention)
    excluded_keys: frozenset[str] = EXCLUDED_PARTIAL_KEYS
    trim_values: bool = True
    strict_nesting: bool = False
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_workers is not positive
        """
        if self.max_workers <= 0:
            msg = "max_workers must be positive"
            raise ValueError(msg)
