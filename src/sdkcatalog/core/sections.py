"""Split an ``sdkmanager --list`` report into its installed and available tables."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class ReportLayout:
    """
    Literal markers of the report format.

    table_header_rows is the number of lines after each section title that
    hold the column names and the dashed rule; tool releases that change the
    table header only need this value adjusted.
    """

    installed_marker: str = "Installed packages:"
    available_marker: str = "Available Packages:"
    updates_marker: str = "Available Updates:"
    table_header_rows: int = 2


DEFAULT_LAYOUT = ReportLayout()


@dataclass
class ReportSections:
    """Raw data rows of the installed and available tables."""

    installed: list[str] = field(default_factory=list)
    available: list[str] = field(default_factory=list)


class _Section(Enum):
    BEFORE_INSTALLED = auto()
    IN_INSTALLED = auto()
    BEFORE_AVAILABLE = auto()
    IN_AVAILABLE = auto()
    DONE = auto()


def split_lines(text: str) -> list[str]:
    return _LINE_BREAK.split(text)


def split_sections(text: str, layout: ReportLayout = DEFAULT_LAYOUT) -> ReportSections:
    """
    Collect the data rows of the installed and available tables.

    The installed table starts after the first line ending with the
    installed marker. Without one, the available marker is searched from the
    top (an SDK root with nothing installed). Blank lines are skipped; the
    updates marker ends the scan. A missing section is simply empty.
    """
    lines = split_lines(text)
    sections = ReportSections()
    if any(line.endswith(layout.installed_marker) for line in lines):
        state = _Section.BEFORE_INSTALLED
    else:
        state = _Section.BEFORE_AVAILABLE
    skip = 0

    for line in lines:
        if state is _Section.DONE:
            break
        if skip:
            skip -= 1
            continue

        if state is _Section.BEFORE_INSTALLED:
            if line.endswith(layout.installed_marker):
                state = _Section.IN_INSTALLED
                skip = layout.table_header_rows
        elif state is _Section.BEFORE_AVAILABLE:
            if line.startswith(layout.available_marker):
                state = _Section.IN_AVAILABLE
                skip = layout.table_header_rows
        elif state is _Section.IN_INSTALLED:
            if line.startswith(layout.available_marker):
                state = _Section.IN_AVAILABLE
                skip = layout.table_header_rows
            elif line.strip():
                sections.installed.append(line)
        elif state is _Section.IN_AVAILABLE:
            if line.startswith(layout.updates_marker):
                state = _Section.DONE
            elif line.strip():
                sections.available.append(line)

    logger.debug(
        "Report sections: %d installed rows, %d available rows (stopped in %s)",
        len(sections.installed),
        len(sections.available),
        state.name,
    )
    return sections
