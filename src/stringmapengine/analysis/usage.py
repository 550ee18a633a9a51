"""String key usage reporting.

Compares the keys a build references against the keys its base-locale files
define. Neither direction blocks a build: an undefined key is reported here
and raised separately when the string map is built, and an unused key only
costs translators effort.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from stringmapengine.analysis.conventions import SuffixWrapperConvention, WrapperConvention
from stringmapengine.enums import KeyUsageKind

__all__ = ["KeyUsageDiagnostic", "UsageReport", "report_key_usage"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class KeyUsageDiagnostic:
    """One referenced-but-undefined or defined-but-unreferenced key.

    Attributes:
        kind: Direction of the mismatch
        module: Owning module
        key: Partial string key
    """

    kind: KeyUsageKind
    module: str
    key: str

    def format(self) -> str:
        """Format as a single log line."""
        return f"{self.kind}: {self.module} {self.key}"


@dataclass(frozen=True, slots=True)
class UsageReport:
    """Immutable collection of key usage diagnostics, sorted by module and key."""

    diagnostics: tuple[KeyUsageDiagnostic, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

    @property
    def undefined(self) -> tuple[KeyUsageDiagnostic, ...]:
        """Keys referenced in source with no base-locale entry."""
        return tuple(d for d in self.diagnostics if d.kind == KeyUsageKind.UNDEFINED)

    @property
    def unused(self) -> tuple[KeyUsageDiagnostic, ...]:
        """Keys defined in the base locale but never referenced."""
        return tuple(d for d in self.diagnostics if d.kind == KeyUsageKind.UNUSED)

    def get_by_module(self, module: str) -> tuple[KeyUsageDiagnostic, ...]:
        """Get all diagnostics for a specific module."""
        return tuple(d for d in self.diagnostics if d.module == module)


def report_key_usage(
    referenced: Mapping[str, Iterable[str]],
    defined: Mapping[str, Iterable[str]],
    *,
    wrapper: WrapperConvention | None = None,
) -> UsageReport:
    """Compare referenced keys against defined keys, module by module.

    Each diagnostic is also logged as a warning.

    Args:
        referenced: Module to partial keys extracted from source
        defined: Module to partial keys present in its base-locale file
        wrapper: Wrapper convention; wrapper accesses are never undefined

    Returns:
        UsageReport covering every module in either mapping
    """
    convention = wrapper if wrapper is not None else SuffixWrapperConvention()
    diagnostics: list[KeyUsageDiagnostic] = []

    for module in sorted(set(referenced) | set(defined)):
        used = set(referenced.get(module, ()))
        available = set(defined.get(module, ()))
        diagnostics.extend(
            KeyUsageDiagnostic(KeyUsageKind.UNDEFINED, module, key)
            for key in used - available
            if not convention.is_wrapper(key)
        )
        diagnostics.extend(
            KeyUsageDiagnostic(KeyUsageKind.UNUSED, module, key) for key in available - used
        )

    diagnostics.sort(key=lambda d: (d.module, d.key, d.kind))
    for diagnostic in diagnostics:
        logger.warning("String key %s", diagnostic.format())
    return UsageReport(tuple(diagnostics))
