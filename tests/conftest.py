"""Shared pytest setup for the StringMapEngine tests.

Hypothesis profiles are chosen per environment:
- ``dev`` (default): 500 examples per property
- ``ci`` (``CI=true``): 50 derandomized examples, failure blobs printed
- ``verbose``: 100 examples with progress output

``HYPOTHESIS_PROFILE`` selects a profile explicitly.

Classes marked ``fuzz`` run thousands of examples and are skipped unless
selected with ``pytest -m fuzz``.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from stringmapengine.locale_utils import clear_locale_cache
from stringmapengine.localization import LocaleCatalog
from tests.helpers.translations import CATALOG_DATA

_PHASES = (Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink)
_PROFILES = {
    "dev": {"max_examples": 500},
    "ci": {"max_examples": 50, "derandomize": True, "print_blob": True},
    "verbose": {"max_examples": 100, "verbosity": Verbosity.verbose},
}

for _name, _options in _PROFILES.items():
    settings.register_profile(_name, phases=_PHASES, **_options)


def _select_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_select_profile())


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz classes unless the run selects the fuzz marker."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="fuzz test, run with: pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)


@pytest.fixture
def catalog() -> LocaleCatalog:
    """Small catalog with multi-level Spanish and Arabic fallbacks."""
    return LocaleCatalog.from_mapping(CATALOG_DATA)


@pytest.fixture(autouse=True)
def _reset_babel_cache():
    """Keep the Babel Locale cache from leaking between tests."""
    yield
    clear_locale_cache()


@pytest.fixture
def engine_log(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture stringmapengine log records at DEBUG level."""
    caplog.set_level(logging.DEBUG, logger="stringmapengine")
    return caplog
