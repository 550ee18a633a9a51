"""StringMapEngine exception hierarchy with structured diagnostics.

Every fatal condition aborts the build synchronously. Exceptions carry a
Diagnostic with enough context (module, locale, key, path) to locate the
offending input.

Hierarchy:
    StringMapError (base)
    ├─ UnknownLocaleError (requested locale absent from the catalog)
    ├─ InvalidLocaleCatalogError (catalog data violates its invariants)
    ├─ TranslationLoadError (translation file present but unreadable)
    │  └─ MalformedTranslationFileError (file present but not valid data)
    ├─ MissingStringEntryError (no locale in the chain defines a key)
    └─ InvalidStringEntryError (nested key outside the a11y namespace)

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "InvalidLocaleCatalogError",
    "InvalidStringEntryError",
    "MalformedTranslationFileError",
    "MissingStringEntryError",
    "StringMapError",
    "TranslationLoadError",
    "UnknownLocaleError",
]


class StringMapError(Exception):
    """Base exception for all StringMapEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize StringMapError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class UnknownLocaleError(StringMapError):
    """A requested locale is not present in the locale catalog.

    Raised eagerly, before any translation file is read, so a mistyped
    build locale surfaces before expensive work is done.

    Attributes:
        locale: The unknown locale code
    """

    def __init__(self, locale: str) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=f"Unknown locale: {locale!r}",
            locale=locale,
            hint="Add the locale to the locale catalog or fix the requested locale list",
        )
        super().__init__(diagnostic)
        self.locale = locale


class InvalidLocaleCatalogError(StringMapError):
    """Locale catalog data violates a catalog invariant.

    Examples:
    - direction other than 'ltr' / 'rtl'
    - fallbackLocales referencing a code that is not in the catalog
    - base locale missing from the catalog
    """


class TranslationLoadError(StringMapError):
    """A translation file exists but could not be read.

    Attributes:
        module: Owning module of the file
        locale: Locale of the file
        path: Human-readable file location
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        module: str = "",
        locale: str = "",
        path: str = "",
    ) -> None:
        super().__init__(message)
        self.module = module
        self.locale = locale
        self.path = path


class MalformedTranslationFileError(TranslationLoadError):
    """A translation file exists but is not well-formed string data.

    Distinct from an absent file, which is expected for untranslated locales
    and yields an empty table. A malformed file is never replaced by an empty
    table.
    """


class MissingStringEntryError(StringMapError):
    """No locale in a key's fallback chain, base included, defines the key.

    The base locale is assumed complete, so this is an authoring error that
    must block the build rather than ship a blank string.

    Attributes:
        module: Owning module of the key
        key: Partial string key
        chain: Fallback chain that was consulted
    """

    def __init__(self, module: str, key: str, chain: Sequence[str]) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.STRING_ENTRY_MISSING,
            message=f"Missing string information for {module} {key}",
            module=module,
            locale=chain[0] if chain else None,
            key=key,
            hint=f"Consulted locales: {', '.join(chain)}",
        )
        super().__init__(diagnostic)
        self.module = module
        self.key = key
        self.chain = tuple(chain)


class InvalidStringEntryError(StringMapError):
    """A string entry is only reachable through nesting outside the a11y namespace.

    Attributes:
        module: Owning module of the key
        key: Partial string key
    """

    def __init__(self, module: str, key: str) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.STRING_ENTRY_NESTED,
            message=f"Nested strings are not allowed outside of a11y string object for key: {key}",
            module=module,
            key=key,
        )
        super().__init__(diagnostic)
        self.module = module
        self.key = key
