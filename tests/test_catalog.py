"""Tests for catalog merge, report parsing and sorting."""

from __future__ import annotations

import pytest

from sdkcatalog.core.catalog import build_catalog, has_packages, parse_report, sort_packages
from sdkcatalog.core.parser import InstallState, Package, parse_record
from sdkcatalog.core.sections import ReportLayout


def _pkg(raw_name: str) -> Package:
    return parse_record(f"{raw_name}| 1| desc", InstallState.AVAILABLE)


class TestBuildCatalog:
    """Tests for build_catalog function."""

    def test_update_available(self) -> None:
        catalog = build_catalog(["a;x| 1.0| desc"], ["a;x| 2.0| desc"])
        assert len(catalog) == 1
        pkg = catalog[0]
        assert pkg.state is InstallState.UPDATEABLE
        assert pkg.version == "1.0(2.0)"
        assert pkg.available_version == "2.0"
        assert pkg.installed_version == "1.0"

    def test_no_downgrade(self) -> None:
        catalog = build_catalog(["a;x| 2.0| desc"], ["a;x| 1.0| desc"])
        assert len(catalog) == 1
        assert catalog[0].state is InstallState.INSTALLED
        assert catalog[0].version == "2.0"

    def test_same_version_stays_installed(self) -> None:
        catalog = build_catalog(["a;x| 1.0| desc"], ["a;x| 1.0.0| other desc"])
        assert catalog[0].state is InstallState.INSTALLED
        assert catalog[0].version == "1.0"
        assert catalog[0].description == "desc"

    def test_updateable_keeps_installed_metadata(self) -> None:
        catalog = build_catalog(
            ["platforms;android-30 | 2 | Installed desc | platforms/android-30/"],
            ["platforms;android-30 | 3 | New desc"],
        )
        pkg = catalog[0]
        assert pkg.description == "Installed desc"
        assert pkg.category == "platforms"
        assert pkg.name == "android-30"
        assert pkg.location == "platforms/android-30/"

    def test_available_only(self) -> None:
        catalog = build_catalog([], ["tools| 26.1.1| Android SDK Tools"])
        assert len(catalog) == 1
        assert catalog[0].state is InstallState.AVAILABLE
        assert catalog[0].version == "26.1.1"

    def test_installed_only(self) -> None:
        catalog = build_catalog(["tools| 26.1.1| Android SDK Tools"], [])
        assert [p.state for p in catalog] == [InstallState.INSTALLED]

    def test_order_installed_then_new_available(self) -> None:
        catalog = build_catalog(
            ["b| 1| B", "a| 1| A"],
            ["c| 1| C", "a| 2| A", "d| 1| D", "b| 1| B"],
        )
        assert [p.raw_name for p in catalog] == ["b", "a", "c", "d"]
        assert [p.state for p in catalog] == [
            InstallState.INSTALLED,
            InstallState.UPDATEABLE,
            InstallState.AVAILABLE,
            InstallState.AVAILABLE,
        ]

    def test_raw_names_unique(self) -> None:
        catalog = build_catalog(
            ["a| 1| A", "a| 1| A again"],
            ["a| 2| A", "b| 1| B", "b| 2| B"],
        )
        names = [p.raw_name for p in catalog]
        assert names == ["a", "b"]
        assert len(set(names)) == len(names)

    def test_duplicate_available_not_flagged(self) -> None:
        catalog = build_catalog([], ["b| 1| B", "b| 2| B"])
        assert catalog[0].state is InstallState.AVAILABLE
        assert catalog[0].version == "1"

    def test_second_update_row_ignored(self) -> None:
        catalog = build_catalog(["a| 1| A"], ["a| 2| A", "a| 3| A"])
        assert catalog[0].version == "1(2)"

    def test_exact_key_match(self) -> None:
        catalog = build_catalog(["Tools| 1| A"], ["tools| 2| B"])
        assert [p.state for p in catalog] == [InstallState.INSTALLED, InstallState.AVAILABLE]

    def test_truncated_rows(self) -> None:
        catalog = build_catalog(["a"], ["a| 2"])
        assert catalog[0].state is InstallState.UPDATEABLE
        assert catalog[0].version == "(2)"
        assert catalog[0].description == ""

    def test_input_rows_unchanged(self) -> None:
        installed = ["a| 1| A"]
        available = ["a| 2| A"]
        build_catalog(installed, available)
        assert installed == ["a| 1| A"]
        assert available == ["a| 2| A"]


class TestParseReport:
    """Tests for parse_report function."""

    def test_sample_report(self, sample_report: str) -> None:
        catalog = parse_report(sample_report)
        by_name = {p.raw_name: p for p in catalog}
        assert len(catalog) == 7

        assert by_name["build-tools;30.0.2"].state is InstallState.INSTALLED
        assert by_name["platforms;android-30"].state is InstallState.INSTALLED

        emulator = by_name["emulator"]
        assert emulator.state is InstallState.UPDATEABLE
        assert emulator.version == "30.0.12(30.2.6)"
        assert emulator.location == "emulator/"

        assert by_name["platform-tools"].version == "30.0.4(30.0.5)"

        image = by_name["system-images;android-30;google_apis;x86_64"]
        assert image.state is InstallState.AVAILABLE
        assert image.category == "system-images"
        assert image.name == "android-30; google_apis; x86_64"
        assert image.version == "10"

        assert by_name["build-tools;30.0.3"].state is InstallState.AVAILABLE

    def test_sample_report_order(self, sample_report: str) -> None:
        assert [p.raw_name for p in parse_report(sample_report)] == [
            "build-tools;30.0.2",
            "emulator",
            "platform-tools",
            "platforms;android-30",
            "add-ons;addon-google_apis-google-24",
            "build-tools;30.0.3",
            "system-images;android-30;google_apis;x86_64",
        ]

    def test_empty_text(self) -> None:
        assert parse_report("") == []

    def test_no_headers(self) -> None:
        assert parse_report("Error: could not find sdkmanager\n") == []

    def test_nothing_installed(self, empty_sdk_report: str) -> None:
        catalog = parse_report(empty_sdk_report)
        assert [p.raw_name for p in catalog] == ["platform-tools", "tools"]
        assert all(p.state is InstallState.AVAILABLE for p in catalog)

    def test_idempotent(self, sample_report: str) -> None:
        assert parse_report(sample_report) == parse_report(sample_report)

    def test_custom_layout(self) -> None:
        text = "Installed packages:\n  a | 1 | A\nAvailable Packages:\n  a | 2 | A\n"
        catalog = parse_report(text, ReportLayout(table_header_rows=0))
        assert catalog[0].version == "1(2)"

    def test_unusual_version_digits(self) -> None:
        huge = "9" * 5000
        text = (
            "Installed packages:\n  h\n  h\n"
            "  a | 1.² | A\n"
            f"  b | 1.{huge} | B\n"
            "Available Packages:\n  h\n  h\n"
            "  a | 1.² | A\n"
            "  b | 1.2 | B\n"
            f"  c | 1.{huge}rc | C\n"
        )
        catalog = parse_report(text)
        assert [p.raw_name for p in catalog] == ["a", "b", "c"]
        assert [p.state for p in catalog] == [
            InstallState.INSTALLED,
            InstallState.INSTALLED,
            InstallState.AVAILABLE,
        ]


class TestHasPackages:
    """Tests for has_packages predicate."""

    def test_empty(self) -> None:
        assert has_packages([]) is False

    def test_non_empty(self, sample_report: str) -> None:
        assert has_packages(parse_report(sample_report)) is True


class TestSortPackages:
    """Tests for sort_packages function."""

    def test_ascending_case_insensitive(self) -> None:
        packages = [_pkg("b"), _pkg("A"), _pkg("c")]
        assert [p.raw_name for p in sort_packages(packages, "asc")] == ["A", "b", "c"]

    def test_descending(self) -> None:
        packages = [_pkg("b"), _pkg("A"), _pkg("c")]
        assert [p.raw_name for p in sort_packages(packages, "desc")] == ["c", "b", "A"]

    def test_default_is_descending(self) -> None:
        packages = [_pkg("b"), _pkg("A"), _pkg("c")]
        assert [p.raw_name for p in sort_packages(packages)] == ["c", "b", "A"]

    def test_returns_new_list(self) -> None:
        packages = [_pkg("b"), _pkg("a")]
        result = sort_packages(packages, "asc")
        assert result is not packages
        assert [p.raw_name for p in packages] == ["b", "a"]

    def test_state_untouched(self, sample_report: str) -> None:
        catalog = parse_report(sample_report)
        states = {p.raw_name: p.state for p in catalog}
        for pkg in sort_packages(catalog, "asc"):
            assert pkg.state is states[pkg.raw_name]

    def test_unknown_order(self) -> None:
        with pytest.raises(ValueError):
            sort_packages([_pkg("a")], "random")
