"""Core library: report section splitting, row parsing, catalog merge and version ordering."""

from sdkcatalog.core.catalog import (
    build_catalog,
    has_packages,
    parse_report,
    sort_packages,
)
from sdkcatalog.core.parser import (
    InstallState,
    Package,
    parse_package_name,
    parse_record,
)
from sdkcatalog.core.sections import (
    DEFAULT_LAYOUT,
    ReportLayout,
    ReportSections,
    split_sections,
)
from sdkcatalog.core.versions import compare_versions, is_update_available

__all__ = [
    "build_catalog",
    "has_packages",
    "parse_report",
    "sort_packages",
    "InstallState",
    "Package",
    "parse_package_name",
    "parse_record",
    "DEFAULT_LAYOUT",
    "ReportLayout",
    "ReportSections",
    "split_sections",
    "compare_versions",
    "is_update_available",
]
