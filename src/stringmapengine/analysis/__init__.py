"""Static analysis of generated source for string usage.

Submodules:
    conventions - WrapperConvention protocol, SuffixWrapperConvention
    modules     - StringModule, module naming, string module discovery
    extraction  - Regex pipeline stages and StringKeyExtractor
    usage       - Referenced-but-undefined / defined-but-unreferenced reports

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from stringmapengine.analysis.conventions import SuffixWrapperConvention, WrapperConvention
from stringmapengine.analysis.extraction import StringKeyExtractor
from stringmapengine.analysis.modules import (
    StringModule,
    discover_string_modules,
    kebab_case,
    pascal_case,
    upper_snake_case,
)
from stringmapengine.analysis.usage import KeyUsageDiagnostic, UsageReport, report_key_usage

__all__ = [
    # Extraction
    "StringKeyExtractor",
    "SuffixWrapperConvention",
    "WrapperConvention",
    # Modules
    "StringModule",
    "discover_string_modules",
    "kebab_case",
    "pascal_case",
    "upper_snake_case",
    # Usage reporting
    "KeyUsageDiagnostic",
    "UsageReport",
    "report_key_usage",
]
