"""Merge installed and available rows into one catalog with a state per package."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from sdkcatalog.core.parser import InstallState, Package, parse_record
from sdkcatalog.core.sections import DEFAULT_LAYOUT, ReportLayout, split_sections
from sdkcatalog.core.versions import is_update_available

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")


def build_catalog(installed: Iterable[str], available: Iterable[str]) -> list[Package]:
    """
    Build the catalog from raw installed and available table rows.

    Rows are keyed by raw name. An available row for an installed package
    marks it Updateable (version becomes "installed(candidate)") only when
    the candidate is strictly newer; otherwise the row is dropped.
    Returns installed packages first, then newly seen available packages.
    """
    packages: list[Package] = []
    index: dict[str, int] = {}

    for line in installed:
        pkg = parse_record(line, InstallState.INSTALLED)
        if pkg.raw_name in index:
            logger.debug("Duplicate installed row ignored: %s", pkg.raw_name)
            continue
        index[pkg.raw_name] = len(packages)
        packages.append(pkg)

    for line in available:
        candidate = parse_record(line, InstallState.AVAILABLE)
        pos = index.get(candidate.raw_name)
        if pos is None:
            index[candidate.raw_name] = len(packages)
            packages.append(candidate)
            continue

        current = packages[pos]
        if current.state is not InstallState.INSTALLED:
            logger.debug("Duplicate available row ignored: %s", candidate.raw_name)
            continue
        if is_update_available(current.version, candidate.version):
            logger.debug(
                "Update for %s: %s -> %s",
                current.raw_name,
                current.version,
                candidate.version,
            )
            packages[pos] = replace(
                current,
                state=InstallState.UPDATEABLE,
                version=f"{current.version}({candidate.version})",
                available_version=candidate.version,
            )

    return packages


def parse_report(text: str, layout: ReportLayout = DEFAULT_LAYOUT) -> list[Package]:
    """Parse the full text of an ``sdkmanager --list`` report into a catalog."""
    sections = split_sections(text, layout)
    return build_catalog(sections.installed, sections.available)


def has_packages(packages: list[Package]) -> bool:
    """True if the report listed at least one package."""
    return len(packages) >= 1


def sort_packages(packages: Iterable[Package], order: str = "desc") -> list[Package]:
    """
    Return a new list sorted by raw name, ignoring case.

    order is "asc" or "desc" (default); anything else raises ValueError.
    """
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {order!r} (expected one of {SORT_ORDERS})")
    return sorted(packages, key=lambda p: p.raw_name.lower(), reverse=order == "desc")
