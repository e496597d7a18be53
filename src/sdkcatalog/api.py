"""Public API: use sdkcatalog from Python or from other tools."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from sdkcatalog.core.catalog import has_packages, parse_report, sort_packages
from sdkcatalog.core.parser import InstallState, Package
from sdkcatalog.core.sections import DEFAULT_LAYOUT, ReportLayout

__all__ = [
    "filter_packages",
    "group_by_category",
    "has_packages",
    "load_catalog",
    "parse_report",
    "read_report",
    "sort_packages",
    "summarize",
]


def read_report(path: str | Path) -> str | None:
    """
    Read a captured ``sdkmanager --list`` report.

    Returns None if the file does not exist or cannot be decoded.
    """
    p = Path(path)
    if not p.exists() or not p.is_file():
        return None
    try:
        return p.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def load_catalog(
    path: str | Path,
    *,
    layout: ReportLayout | None = None,
) -> list[Package] | None:
    """
    Read and parse a report file.

    Returns None if the file cannot be read; an unreadable report is not the
    same as a report listing no packages.
    """
    text = read_report(path)
    if text is None:
        return None
    return parse_report(text, layout or DEFAULT_LAYOUT)


def filter_packages(
    packages: Iterable[Package],
    *,
    states: Iterable[InstallState] | None = None,
    category: str | None = None,
    query: str | None = None,
) -> list[Package]:
    """
    Keep packages matching every given criterion.

    Args:
        packages: Catalog to filter.
        states: Allowed install states; None keeps all.
        category: Exact category (first path segment); None keeps all.
        query: Case-insensitive substring of raw name or description.

    Returns:
        Matching packages in input order.
    """
    allowed = set(states) if states is not None else None
    needle = query.lower() if query else None
    result: list[Package] = []
    for pkg in packages:
        if allowed is not None and pkg.state not in allowed:
            continue
        if category is not None and pkg.category != category:
            continue
        if needle and needle not in pkg.raw_name.lower() and needle not in pkg.description.lower():
            continue
        result.append(pkg)
    return result


def group_by_category(packages: Iterable[Package]) -> dict[str, list[Package]]:
    """Group packages by category, keeping first-seen category order."""
    groups: dict[str, list[Package]] = {}
    for pkg in packages:
        groups.setdefault(pkg.category, []).append(pkg)
    return groups


def summarize(packages: Iterable[Package]) -> dict:
    """Count packages per state and per category (JSON-friendly)."""
    packages = list(packages)
    counts = {state: 0 for state in InstallState}
    for pkg in packages:
        counts[pkg.state] += 1
    return {
        "total": len(packages),
        "installed": counts[InstallState.INSTALLED],
        "available": counts[InstallState.AVAILABLE],
        "updateable": counts[InstallState.UPDATEABLE],
        "categories": {name: len(pkgs) for name, pkgs in group_by_category(packages).items()},
    }
