"""Tests for string key usage reporting."""

from __future__ import annotations

import logging

import pytest

from stringmapengine.analysis import (
    KeyUsageDiagnostic,
    SuffixWrapperConvention,
    UsageReport,
    report_key_usage,
)
from stringmapengine.enums import KeyUsageKind


class TestReportKeyUsage:
    """Test referenced/defined comparison."""

    def test_undefined_and_unused(self) -> None:
        """Both directions are reported per module."""
        report = report_key_usage(
            {"joist": {"title", "missing"}},
            {"joist": {"title", "stale"}},
        )

        assert report.undefined == (KeyUsageDiagnostic(KeyUsageKind.UNDEFINED, "joist", "missing"),)
        assert report.unused == (KeyUsageDiagnostic(KeyUsageKind.UNUSED, "joist", "stale"),)
        assert len(report) == 2

    def test_clean_report_is_falsy(self) -> None:
        """A report without diagnostics is falsy."""
        report = report_key_usage({"joist": ["a"]}, {"joist": ["a"]})

        assert not report
        assert report == UsageReport()

    def test_wrapper_keys_never_undefined(self) -> None:
        """Wrapper accesses are not reported as undefined."""
        report = report_key_usage({"joist": ["titleStringProperty"]}, {"joist": []})

        assert report.undefined == ()

    def test_custom_wrapper_convention(self) -> None:
        """The wrapper convention is pluggable."""
        report = report_key_usage(
            {"joist": ["titleStringProperty"]},
            {"joist": []},
            wrapper=SuffixWrapperConvention("Observable"),
        )

        assert [d.key for d in report.undefined] == ["titleStringProperty"]

    def test_modules_on_one_side_only(self) -> None:
        """Modules present in only one mapping are still covered."""
        report = report_key_usage({"joist": ["a"]}, {"sun": ["b"]})

        assert report.get_by_module("joist")[0].kind == KeyUsageKind.UNDEFINED
        assert report.get_by_module("sun")[0].kind == KeyUsageKind.UNUSED

    def test_sorted_output(self) -> None:
        """Diagnostics are ordered by module, then key."""
        report = report_key_usage(
            {"sun": ["z"], "joist": ["b"]},
            {"sun": ["a"], "joist": ["c"]},
        )

        assert [(d.module, d.key) for d in report.diagnostics] == [
            ("joist", "b"), ("joist", "c"), ("sun", "a"), ("sun", "z"),
        ]

    def test_each_diagnostic_logged(self, engine_log: pytest.LogCaptureFixture) -> None:
        """Every diagnostic is logged as a warning."""
        report_key_usage({"joist": ["missing"]}, {"joist": ["stale"]})

        warnings = [r.getMessage() for r in engine_log.records if r.levelno == logging.WARNING]
        assert warnings == [
            "String key referenced-but-undefined: joist missing",
            "String key defined-but-unreferenced: joist stale",
        ]
