"""sdkcatalog: turn Android SDK manager listings into a package catalog (library, TUI, CLI)."""

from importlib.metadata import version, PackageNotFoundError

from sdkcatalog.api import (
    filter_packages,
    group_by_category,
    has_packages,
    load_catalog,
    parse_report,
    read_report,
    sort_packages,
    summarize,
)
from sdkcatalog.core import InstallState, Package, ReportLayout, compare_versions

__all__ = [
    "filter_packages",
    "group_by_category",
    "has_packages",
    "load_catalog",
    "parse_report",
    "read_report",
    "sort_packages",
    "summarize",
    "InstallState",
    "Package",
    "ReportLayout",
    "compare_versions",
    "__version__",
]

try:
    __version__ = version("sdkcatalog")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package
