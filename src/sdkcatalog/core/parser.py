"""Parse one row of an ``sdkmanager --list`` table into a Package record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Column separator used by every table in the report.
FIELD_DELIMITER = "| "
# Separator between the segments of a package path ("platforms;android-30").
NAME_DELIMITER = ";"


class InstallState(str, Enum):
    """Where a package stands on the target SDK root."""

    INSTALLED = "Installed"
    AVAILABLE = "Available"
    UPDATEABLE = "Updateable"


@dataclass(frozen=True)
class Package:
    """One SDK package as reported by the package manager."""

    raw_name: str
    category: str
    name: str
    version: str
    description: str
    state: InstallState
    location: str = ""
    available_version: str = ""  # set on Updateable entries only
    details: tuple[str, ...] | None = None

    @property
    def is_installed(self) -> bool:
        return self.state is not InstallState.AVAILABLE

    @property
    def installed_version(self) -> str:
        """Installed version without the "(candidate)" suffix of updateable entries."""
        if self.state is InstallState.AVAILABLE:
            return ""
        suffix = f"({self.available_version})"
        if self.available_version and self.version.endswith(suffix):
            return self.version[: -len(suffix)]
        return self.version

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict (for CLI and API output)."""
        return {
            "raw_name": self.raw_name,
            "category": self.category,
            "name": self.name,
            "version": self.version,
            "available_version": self.available_version,
            "description": self.description,
            "location": self.location,
            "state": self.state.value,
            "details": list(self.details) if self.details is not None else None,
        }


def parse_package_name(raw_name: str) -> tuple[str, str]:
    """
    Split a package path into (category, name).

    "platforms;android-30" -> ("platforms", "android-30"); a single segment
    is both category and name ("tools" -> ("tools", "tools")).
    """
    segments = raw_name.split(NAME_DELIMITER)
    category = segments[0]
    rest = segments[1:]
    if rest and rest[0]:
        return category, "; ".join(rest)
    return category, category


def split_fields(line: str) -> list[str]:
    return [field.strip() for field in line.split(FIELD_DELIMITER)]


def _field(fields: list[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""


def parse_record(line: str, state: InstallState) -> Package:
    """
    Parse a table row (Path | Version | Description [| Location]).

    Missing columns parse to empty strings; a truncated row still yields a
    record rather than an error.
    """
    fields = split_fields(line)
    raw_name = _field(fields, 0)
    category, name = parse_package_name(raw_name)
    return Package(
        raw_name=raw_name,
        category=category,
        name=name,
        version=_field(fields, 1),
        description=_field(fields, 2),
        state=state,
        location=_field(fields, 3),
    )
