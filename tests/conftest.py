"""Shared fixtures: captured 'sdkmanager --list' reports."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_REPORT = """\
[=======================================] 100% Computing updates...
Installed packages:
  Path                 | Version | Description                    | Location
  -------              | ------- | -------                        | -------
  build-tools;30.0.2   | 30.0.2  | Android SDK Build-Tools 30.0.2 | build-tools/30.0.2/
  emulator             | 30.0.12 | Android Emulator               | emulator/
  platform-tools       | 30.0.4  | Android SDK Platform-Tools     | platform-tools/
  platforms;android-30 | 3       | Android SDK Platform 30        | platforms/android-30/

Available Packages:
  Path                 | Version | Description
  -------              | ------- | -------
  add-ons;addon-google_apis-google-24 | 1 | Google APIs
  build-tools;30.0.2   | 30.0.2  | Android SDK Build-Tools 30.0.2
  build-tools;30.0.3   | 30.0.3  | Android SDK Build-Tools 30.0.3
  emulator             | 30.2.6  | Android Emulator
  platform-tools       | 30.0.5  | Android SDK Platform-Tools
  platforms;android-30 | 3       | Android SDK Platform 30

  system-images;android-30;google_apis;x86_64 | 10 | Google APIs Intel x86 Atom_64 System Image

Available Updates:
  ID             | Installed | Available
  -------        | -------   | -------
  emulator       | 30.0.12   | 30.2.6
  platform-tools | 30.0.4    | 30.0.5
"""

# An SDK root with nothing installed: no installed table at all.
EMPTY_SDK_REPORT = """\
[=======================================] 100% Computing updates...
Available Packages:
  Path                 | Version | Description
  -------              | ------- | -------
  platform-tools       | 30.0.5  | Android SDK Platform-Tools
  tools                | 26.1.1  | Android SDK Tools
"""


@pytest.fixture
def sample_report() -> str:
    return SAMPLE_REPORT


@pytest.fixture
def empty_sdk_report() -> str:
    return EMPTY_SDK_REPORT


@pytest.fixture
def report_file(tmp_path: Path) -> Path:
    path = tmp_path / "sdkmanager-list.txt"
    path.write_text(SAMPLE_REPORT)
    return path
