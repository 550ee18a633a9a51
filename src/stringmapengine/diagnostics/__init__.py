"""Diagnostic system for StringMapEngine errors.

Provides the exception hierarchy and structured diagnostics with codes,
locating context and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    InvalidLocaleCatalogError,
    InvalidStringEntryError,
    MalformedTranslationFileError,
    MissingStringEntryError,
    StringMapError,
    TranslationLoadError,
    UnknownLocaleError,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "InvalidLocaleCatalogError",
    "InvalidStringEntryError",
    "MalformedTranslationFileError",
    "MissingStringEntryError",
    "StringMapError",
    "TranslationLoadError",
    "UnknownLocaleError",
]
