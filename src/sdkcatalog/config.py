"""Environment-driven settings shared by the CLI and the TUI."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

from sdkcatalog.core.sections import DEFAULT_LAYOUT, ReportLayout

logger = logging.getLogger(__name__)

ENV_HEADER_ROWS = "SDKCATALOG_HEADER_ROWS"
ENV_REPORT = "SDKCATALOG_REPORT"


def _env(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def layout_from_env(
    environ: Mapping[str, str] | None = None,
    *,
    header_rows: int | None = None,
) -> ReportLayout:
    """
    Resolve the report layout.

    An explicit header_rows (from the command line) wins over
    SDKCATALOG_HEADER_ROWS; invalid environment values are ignored.
    """
    if header_rows is not None:
        return replace(DEFAULT_LAYOUT, table_header_rows=header_rows)

    raw = _env(environ).get(ENV_HEADER_ROWS, "").strip()
    if not raw:
        return DEFAULT_LAYOUT
    try:
        rows = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", ENV_HEADER_ROWS, raw)
        return DEFAULT_LAYOUT
    if rows < 0:
        logger.warning("Ignoring %s=%r: must not be negative", ENV_HEADER_ROWS, raw)
        return DEFAULT_LAYOUT
    return replace(DEFAULT_LAYOUT, table_header_rows=rows)


def default_report_path(environ: Mapping[str, str] | None = None) -> Path | None:
    """Report file named by SDKCATALOG_REPORT, or None when unset."""
    value = _env(environ).get(ENV_REPORT, "").strip()
    if not value:
        return None
    return Path(value).expanduser()
