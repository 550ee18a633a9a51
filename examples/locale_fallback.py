"""StringMapEngine Example - Building String Maps with Fallback Chains.

Demonstrates a complete localization build over a throwaway checkout:
a locale catalog, base-locale string files beside each module, and partial
translations in a separate translation directory.

Scenarios covered:
1. Inspecting fallback chains
2. Building every translated locale of a project
3. Observing which keys fall back
4. Pruned locale data for the runtime

NOTE: Every non-empty value is wrapped in Unicode embedding marks (LRE/RLE
... PDF). They are invisible in most terminals; repr() shows them.

Python 3.13+.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from stringmapengine import (
    FallbackResolver,
    LocaleCatalog,
    PathTranslationLoader,
    build_localization,
)
from stringmapengine.localization import FallbackInfo

CATALOG = {
    "en": {"englishName": "English", "localizedName": "English", "direction": "ltr"},
    "es": {"englishName": "Spanish", "localizedName": "Español", "direction": "ltr"},
    "es_PY": {"englishName": "Spanish (Paraguay)", "localizedName": "Español (Paraguay)",
              "direction": "ltr", "fallbackLocales": ["es"]},
    "ar": {"englishName": "Arabic", "localizedName": "العربية", "direction": "rtl"},
    "fr": {"englishName": "French", "localizedName": "Français", "direction": "ltr"},
}

SOURCE = """
import JoistStrings from './JoistStrings.js';
const title = JoistStrings.titleStringProperty.value;
const about = JoistStrings[ 'menu.about' ];
"""


def write_checkout(root: Path) -> None:
    """Lay out catalog and string files the way a checkout does."""
    (root / "localeData.json").write_text(json.dumps(CATALOG), encoding="utf-8")
    files = {
        "joist/joist-strings_en.json": {
            "title": {"value": "Simulation", "metadata": {"phetioReadOnly": True}},
            "menu.about": {"value": "About"},
            "menu.unused": {"value": "Nobody reads me"},
        },
        "babel/joist/joist-strings_es.json": {"title": {"value": "Simulación"}},
        "babel/joist/joist-strings_ar.json": {
            "title": {"value": "محاكاة"},
            "menu.about": {"value": "حول"},
        },
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")


def example_1_fallback_chains(catalog: LocaleCatalog) -> None:
    """Example 1: Chains from each locale toward the base."""
    print("=" * 60)
    print("Example 1: Fallback Chains")
    print("=" * 60)

    resolver = FallbackResolver(catalog)
    for code in catalog:
        print(f"  {code:6} => {' -> '.join(resolver.resolve(code))}")


def example_2_build_all_locales(catalog: LocaleCatalog, root: Path) -> None:
    """Example 2: Build every locale the project has translations for."""
    print("\n" + "=" * 60)
    print("Example 2: Build All Locales")
    print("=" * 60)

    artifacts = build_localization([SOURCE], catalog, PathTranslationLoader(str(root)))

    print(f"Locales: {artifacts.locales}")
    for locale in artifacts.locales:
        print(f"\n[{locale}]")
        for key, value in artifacts.strings_for(locale).items():
            print(f"  {key} = {value!r}")
    print(f"\nMetadata: {artifacts.string_metadata}")
    print(f"Unused keys: {[d.key for d in artifacts.usage.unused]}")


def example_3_observe_fallbacks(catalog: LocaleCatalog, root: Path) -> None:
    """Example 3: Log every key that comes from a fallback locale."""
    print("\n" + "=" * 60)
    print("Example 3: Fallback Observability")
    print("=" * 60)

    def log_fallback(info: FallbackInfo) -> None:
        print(f"  {info.module} {info.key}: {info.requested_locale} -> {info.resolved_locale}")

    build_localization(
        [SOURCE], catalog, PathTranslationLoader(str(root)),
        locales=["es_PY", "fr"], on_fallback=log_fallback,
    )


def example_4_pruned_locale_data(catalog: LocaleCatalog, root: Path) -> None:
    """Example 4: Locale data shipped to the runtime."""
    print("\n" + "=" * 60)
    print("Example 4: Pruned Locale Data")
    print("=" * 60)

    artifacts = build_localization([SOURCE], catalog, PathTranslationLoader(str(root)))
    print(json.dumps(artifacts.locale_data, indent=2, ensure_ascii=False))


# Main execution
if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp_dir:
        checkout = Path(tmp_dir)
        write_checkout(checkout)
        locale_catalog = LocaleCatalog.load(checkout / "localeData.json")

        example_1_fallback_chains(locale_catalog)
        example_2_build_all_locales(locale_catalog, checkout)
        example_3_observe_fallbacks(locale_catalog, checkout)
        example_4_pruned_locale_data(locale_catalog, checkout)

    print("\n" + "=" * 60)
    print("[SUCCESS] All examples complete!")
    print("=" * 60)
