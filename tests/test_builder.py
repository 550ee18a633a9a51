"""Tests for StringMapBuilder.

Covers fallback resolution through the TranslationStore, wrapper handling,
metadata recording, strict nesting, the fallback callback and the build's
completeness and correctness properties.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stringmapengine.analysis import StringModule
from stringmapengine.config import BuildConfig
from stringmapengine.diagnostics import (
    InvalidStringEntryError,
    MissingStringEntryError,
    UnknownLocaleError,
)
from stringmapengine.localization import (
    FallbackInfo,
    FallbackResolver,
    LocaleCatalog,
    StringMapBuilder,
    TranslationStore,
)
from tests.helpers.translations import (
    CATALOG_DATA,
    DictTranslationLoader,
    entries,
    ltr,
    rtl,
    source_importing,
)
from tests.strategies import partial_keys

JOIST = StringModule("joist")


def make_builder(
    catalog: LocaleCatalog,
    files: dict,
    texts: list[str],
    **kwargs: object,
) -> tuple[StringMapBuilder, DictTranslationLoader]:
    loader = DictTranslationLoader(files)
    config = kwargs.pop("config", None)
    store = TranslationStore(catalog, loader, config)  # type: ignore[arg-type]
    builder = StringMapBuilder(
        FallbackResolver(catalog), store, texts, config=config, **kwargs  # type: ignore[arg-type]
    )
    return builder, loader


class TestScenarios:
    """End-to-end scenarios of a single build."""

    def test_simple_fallback(self) -> None:
        """es_PY without a file resolves every key from es."""
        catalog = LocaleCatalog.from_mapping({
            "en": {},
            "es": {"fallbackLocales": []},
            "es_PY": {"fallbackLocales": ["es"]},
        })
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): entries(title="Title", ok="OK"),
                ("joist", "es"): entries(title="Título", ok="Aceptar"),
            },
            [source_importing("JoistStrings", ".title", ".okStringProperty.value")],
        )

        result = builder.build([JOIST], ["es_PY"])

        assert result.string_map == {
            "es_PY": {"JOIST/title": ltr("Título"), "JOIST/ok": ltr("Aceptar")},
        }

    def test_missing_base_entry(self, catalog: LocaleCatalog) -> None:
        """A key absent from the base file fails even if others define it."""
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): entries(title="Title"),
                ("joist", "es"): entries(title="Título", extra="Extra"),
                ("joist", "ar"): entries(title="عنوان", extra="إضافي"),
            },
            [source_importing("JoistStrings", ".title", ".extra")],
        )

        with pytest.raises(MissingStringEntryError) as exc_info:
            builder.build([JOIST], ["en", "es", "ar"])

        error = exc_info.value
        assert (error.module, error.key, error.chain) == ("joist", "extra", ("en",))
        assert "Missing string information for joist extra" in str(error)

    def test_missing_everywhere_reports_chain(self, catalog: LocaleCatalog) -> None:
        """The consulted chain is carried by the error."""
        builder, _ = make_builder(
            catalog, {}, [source_importing("JoistStrings", ".title")]
        )

        with pytest.raises(MissingStringEntryError) as exc_info:
            builder.build([JOIST], ["es_PY"])

        assert exc_info.value.chain == ("es_PY", "es", "en")


class TestResolution:
    """Test per-key resolution rules."""

    def test_direct_translation_wins(self, catalog: LocaleCatalog) -> None:
        """The requested locale beats every fallback."""
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): entries(title="Title"),
                ("joist", "es"): entries(title="Título"),
                ("joist", "es_PY"): entries(title="Título PY"),
            },
            [source_importing("JoistStrings", ".title")],
        )

        result = builder.build([JOIST], ["es_PY"])

        assert result.string_map["es_PY"]["JOIST/title"] == ltr("Título PY")

    def test_second_fallback_in_order(self, catalog: LocaleCatalog) -> None:
        """Fallbacks are consulted in catalog order."""
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): entries(a="A", b="B"),
                ("joist", "ar"): entries(a="أ"),
                ("joist", "ar_MA"): entries(a="MA-a", b="MA-b"),
            },
            [source_importing("JoistStrings", ".a", ".b")],
        )

        result = builder.build([JOIST], ["ar_AE"])

        assert result.string_map["ar_AE"] == {"JOIST/a": rtl("أ"), "JOIST/b": rtl("MA-b")}

    def test_every_build_locale_present(self, catalog: LocaleCatalog) -> None:
        """Untranslated locales still get a full map via the base."""
        builder, _ = make_builder(
            catalog,
            {("joist", "en"): entries(title="Title")},
            [source_importing("JoistStrings", ".title")],
        )

        result = builder.build([JOIST], ["fr", "ar_MA", "en"])

        assert result.locales == ("fr", "ar_MA", "en")
        assert all(m == {"JOIST/title": ltr("Title")} for m in result.string_map.values())

    def test_empty_value_is_authoritative(self, catalog: LocaleCatalog) -> None:
        """An empty translation is used rather than falling back."""
        builder, _ = make_builder(
            catalog,
            {("joist", "en"): entries(title="Title"), ("joist", "es"): entries(title="")},
            [source_importing("JoistStrings", ".title")],
        )

        assert builder.build([JOIST], ["es"]).string_map["es"]["JOIST/title"] == ""

    def test_only_chain_files_are_read(self, catalog: LocaleCatalog) -> None:
        """Files outside the build locales' chains are never loaded."""
        builder, loader = make_builder(
            catalog,
            {("joist", "en"): entries(title="Title")},
            [source_importing("JoistStrings", ".title")],
        )

        builder.build([JOIST], ["es_PY"])

        assert set(loader.calls) == {("joist", "es_PY"), ("joist", "es"), ("joist", "en")}

    def test_unknown_locale_before_any_read(self, catalog: LocaleCatalog) -> None:
        """Unknown build locales fail before any file is read."""
        builder, loader = make_builder(
            catalog,
            {("joist", "en"): entries(title="Title")},
            [source_importing("JoistStrings", ".title")],
        )

        with pytest.raises(UnknownLocaleError):
            builder.build([JOIST], ["en", "es", "klingon"])
        assert loader.calls == []

    def test_namespaces_per_module(self, catalog: LocaleCatalog) -> None:
        """Full keys use each module's namespace."""
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): entries(title="Title"),
                ("scenery-phet", "en"): entries(reset="Reset"),
            },
            [
                source_importing("JoistStrings", ".title"),
                source_importing("SceneryPhetStrings", ".reset"),
            ],
        )

        result = builder.build([StringModule("scenery-phet"), JOIST], ["en"])

        assert result.string_map["en"] == {
            "JOIST/title": ltr("Title"),
            "SCENERY_PHET/reset": ltr("Reset"),
        }
        assert result.referenced_keys == {
            "joist": frozenset({"title"}),
            "scenery-phet": frozenset({"reset"}),
        }


class TestWrappersAndNesting:
    """Test wrapper keys and nested entries."""

    def test_wrapper_key_never_emitted(self, catalog: LocaleCatalog) -> None:
        """Keys denoting wrappers are skipped, defined or not."""

        class KeepWholeAccess:
            def truncate(self, access: str) -> str:
                return access

            def is_wrapper(self, partial_key: str) -> bool:
                return partial_key.endswith("Property")

        builder, _ = make_builder(
            catalog,
            {("joist", "en"): entries(title="Title")},
            [source_importing("JoistStrings", ".title", ".titleProperty")],
            config=BuildConfig(wrapper=KeepWholeAccess()),
        )

        result = builder.build([JOIST], ["en"])

        assert result.string_map["en"] == {"JOIST/title": ltr("Title")}
        assert result.referenced_keys["joist"] == frozenset({"title", "titleProperty"})

    def test_nested_a11y_lookup(self, catalog: LocaleCatalog) -> None:
        """Nested a11y entries resolve by dotted key."""
        builder, _ = make_builder(
            catalog,
            {("joist", "en"): {"a11y": {"home": {"label": {"value": "Home"}}}}},
            [source_importing("JoistStrings", ".a11y.home.labelStringProperty")],
            config=BuildConfig(strict_nesting=True),
        )

        result = builder.build([JOIST], ["en"])

        assert result.string_map["en"] == {"JOIST/a11y.home.label": ltr("Home")}

    def test_strict_nesting_rejects_non_a11y(self, catalog: LocaleCatalog) -> None:
        """Strict nesting rejects nested keys outside a11y."""
        builder, _ = make_builder(
            catalog,
            {("joist", "en"): {"menu": {"about": {"value": "About"}}}},
            [source_importing("JoistStrings", ".menu.about")],
            config=BuildConfig(strict_nesting=True),
        )

        with pytest.raises(InvalidStringEntryError, match="menu.about"):
            builder.build([JOIST], ["en"])

    def test_lenient_nesting_by_default(self, catalog: LocaleCatalog) -> None:
        """Without strict nesting any nested key resolves."""
        builder, _ = make_builder(
            catalog,
            {("joist", "en"): {"menu": {"about": {"value": "About"}}}},
            [source_importing("JoistStrings", ".menu.about")],
        )

        assert builder.build([JOIST], ["en"]).string_map["en"] == {"JOIST/menu.about": ltr("About")}


class TestMetadataAndCallbacks:
    """Test metadata recording and fallback observability."""

    def test_metadata_only_from_base(self, catalog: LocaleCatalog) -> None:
        """Metadata comes from the base entry only."""
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): {
                    "title": {"value": "Title", "metadata": {"phetioReadOnly": True}},
                    "ok": {"value": "OK", "metadata": {"limit": 10}},
                },
                ("joist", "es"): {
                    "title": {"value": "Título", "metadata": {"phetioReadOnly": False}},
                },
            },
            [source_importing("JoistStrings", ".title", ".ok")],
        )

        result = builder.build([JOIST], ["es"])

        assert result.string_metadata == {"JOIST/ok": {"limit": 10}}

    def test_metadata_recorded_when_base_built(self, catalog: LocaleCatalog) -> None:
        """Building the base locale records every base metadata."""
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): {"title": {"value": "Title", "metadata": {"phetioReadOnly": True}}},
                ("joist", "es"): entries(title="Título"),
            },
            [source_importing("JoistStrings", ".title")],
        )

        result = builder.build([JOIST], ["es", "en"])

        assert result.string_metadata == {"JOIST/title": {"phetioReadOnly": True}}

    def test_metadata_is_independent_of_store(self, catalog: LocaleCatalog) -> None:
        """Mutating returned metadata leaves the cached entries untouched."""
        builder, _ = make_builder(
            catalog,
            {("joist", "en"): {"title": {"value": "Title", "metadata": {"phetioReadOnly": True}}}},
            [source_importing("JoistStrings", ".title")],
        )

        first = builder.build([JOIST], ["en"])
        first.string_metadata["JOIST/title"]["phetioReadOnly"] = False  # type: ignore[index]
        second = builder.build([JOIST], ["en"])

        assert second.string_metadata == {"JOIST/title": {"phetioReadOnly": True}}

    def test_on_fallback_callback(self, catalog: LocaleCatalog) -> None:
        """The callback sees every resolution from a later chain locale."""
        events: list[FallbackInfo] = []
        builder, _ = make_builder(
            catalog,
            {
                ("joist", "en"): entries(a="A", b="B"),
                ("joist", "es"): entries(a="a-es"),
            },
            [source_importing("JoistStrings", ".a", ".b")],
            on_fallback=events.append,
        )

        builder.build([JOIST], ["en", "es_PY"])

        assert events == [
            FallbackInfo("es_PY", "es", "joist", "a"),
            FallbackInfo("es_PY", "en", "joist", "b"),
        ]


class TestBuildProperties:
    """Property tests over generated key sets."""

    @given(
        st.lists(partial_keys, min_size=1, max_size=8, unique=True),
        st.sets(st.sampled_from(list(CATALOG_DATA)), min_size=1),
        st.data(),
    )
    def test_map_completeness_and_fallback_correctness(
        self, keys: list[str], locales: set[str], data: st.DataObject
    ) -> None:
        """Every key is present for every locale, preferring direct translations."""
        catalog = LocaleCatalog.from_mapping(CATALOG_DATA)
        files: dict[tuple[str, str], dict] = {("joist", "en"): entries(**{k: f"en:{k}" for k in keys})}
        for locale in CATALOG_DATA:
            if locale == "en":
                continue
            translated = data.draw(st.lists(st.sampled_from(keys), unique=True), label=locale)
            if translated:
                files["joist", locale] = entries(**{k: f"{locale}:{k}" for k in translated})

        builder, _ = make_builder(
            catalog, files, [source_importing("JoistStrings", *(f".{k}" for k in keys))]
        )
        result = builder.build([JOIST], sorted(locales))
        resolver = FallbackResolver(catalog)

        assert set(result.string_map) == locales
        for locale in locales:
            chain = resolver.resolve(locale)
            for key in keys:
                expected_locale = next(
                    loc for loc in chain if key in files.get(("joist", loc), {})
                )
                value = result.string_map[locale][f"JOIST/{key}"]
                assert value.endswith(f"{expected_locale}:{key}\u202c")
