"""Hypothesis strategies for locale catalogs and generated source.

Provides reusable strategies for generating:
- Well-formed locale catalogs with arbitrary fallback graphs (cycles allowed)
- Partial string keys in dot and bracket access syntax

Event-Emitting Strategies (HypoFuzz-Optimized):
- locale_catalogs: Emits catalog_size=small|medium|large
- access_spellings: Emits access_form=dot|bracket|mixed

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

from stringmapengine.enums import TextDirection
from stringmapengine.localization import LocaleCatalog, LocaleRecord

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

BASE = "en"

_LOCALE_POOL = [
    "en", "en_GB",
    "de", "de_AT",
    "fr", "fr_CA",
    "es", "es_PY", "es_MX",
    "ar", "ar_MA", "ar_AE",
    "ak", "tw",
    "lv", "zh", "zh_CN", "ja",
]

_IDENT_FIRST = string.ascii_letters
_IDENT_REST = string.ascii_letters + string.digits


@st.composite
def locale_catalogs(draw: DrawFn, max_size: int = 10) -> LocaleCatalog:
    """Generate a valid catalog with base 'en' and random fallback lists.

    Events emitted:
    - catalog_size=small|medium|large
    """
    others = draw(st.lists(
        st.sampled_from([c for c in _LOCALE_POOL if c != BASE]),
        unique=True,
        max_size=max_size - 1,
    ))
    codes = [BASE, *others]
    records = []
    for code in codes:
        fallbacks = draw(st.lists(st.sampled_from(codes), unique=True, max_size=3))
        direction = draw(st.sampled_from(list(TextDirection)))
        records.append(LocaleRecord(
            code=code,
            english_name=code,
            localized_name=code,
            direction=direction,
            fallback_locales=tuple(fallbacks),
        ))
    size_class = "small" if len(codes) <= 3 else "medium" if len(codes) <= 7 else "large"
    event(f"catalog_size={size_class}")
    return LocaleCatalog(records, base_locale=BASE)


@st.composite
def catalog_with_locales(draw: DrawFn) -> tuple[LocaleCatalog, list[str]]:
    """Generate a catalog together with a subset of its codes."""
    catalog = draw(locale_catalogs())
    subset = draw(st.lists(st.sampled_from(list(catalog)), unique=True, max_size=5))
    return catalog, subset


identifiers = st.builds(
    lambda first, rest: first + rest,
    st.sampled_from(list(_IDENT_FIRST)),
    st.text(alphabet=_IDENT_REST, max_size=12),
).filter(lambda ident: "StringProperty" not in ident and ident != "js")
"""JavaScript identifiers usable as key segments."""

partial_keys = st.lists(identifiers, min_size=1, max_size=4).map(".".join)
"""Dotted partial string keys."""


@st.composite
def access_spellings(draw: DrawFn, key: str) -> str:
    """Spell a partial key as a property access chain (prefix excluded).

    Events emitted:
    - access_form=dot|bracket|mixed
    """
    parts = []
    forms = set()
    for segment in key.split("."):
        if draw(st.booleans()):
            parts.append(f".{segment}")
            forms.add("dot")
        else:
            quote = draw(st.sampled_from(["'", '"']))
            pad = draw(st.sampled_from(["", " "]))
            parts.append(f"[{pad}{quote}{segment}{quote}{pad}]")
            forms.add("bracket")
    event(f"access_form={forms.pop() if len(forms) == 1 else 'mixed'}")
    return "".join(parts)
