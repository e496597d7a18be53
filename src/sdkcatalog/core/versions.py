"""Compare dotted version strings as reported by the SDK package manager."""

from __future__ import annotations

import re

# Trailing ".0" runs carry no ordering weight: "1.2.0.0" == "1.2".
_TRAILING_ZEROS = re.compile(r"(\.0+)+$")
_SEGMENT = re.compile(r"([0-9]*)(.*)", re.DOTALL)
_NUMERIC = re.compile(r"[0-9]+")
# Longer digit runs are ordered without int() conversion.
_SMALL_NUMBER_DIGITS = 18


def _strip_trailing_zeros(version: str) -> str:
    return _TRAILING_ZEROS.sub("", version)


def _number_key(digits: str) -> tuple[int, str]:
    """Order ASCII digit runs of any length: fewer significant digits is smaller."""
    significant = digits.lstrip("0")
    return len(significant), significant


def _segment_key(segment: str) -> tuple[int, str, int, str]:
    """
    Sort key for one dot-separated segment.

    Leading digits compare numerically (no digits ranks lowest). With equal
    numbers a bare segment outranks one carrying a suffix, so "2" > "2-rc1";
    two suffixes compare as text.
    """
    match = _SEGMENT.match(segment)
    digits, suffix = match.group(1), match.group(2)
    length, significant = _number_key(digits) if digits else (-1, "")
    return length, significant, 0 if suffix else 1, suffix


def _compare_segments(a: str, b: str) -> int:
    if _NUMERIC.fullmatch(a) and _NUMERIC.fullmatch(b):
        if len(a) <= _SMALL_NUMBER_DIGITS and len(b) <= _SMALL_NUMBER_DIGITS:
            return int(a) - int(b)
        key_a, key_b = _number_key(a), _number_key(b)
    else:
        key_a, key_b = _segment_key(a), _segment_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def compare_versions(a: str, b: str) -> int:
    """
    Compare two version strings.

    Returns a negative number if a < b, zero if they are equal and a positive
    number if a > b. Segments are compared numerically ("1.10" > "1.9"); when
    one version is a prefix of the other, the shorter one is smaller
    ("1.2" < "1.2.3"). Never raises, whatever the input.
    """
    segments_a = _strip_trailing_zeros(a).split(".")
    segments_b = _strip_trailing_zeros(b).split(".")

    for seg_a, seg_b in zip(segments_a, segments_b):
        diff = _compare_segments(seg_a, seg_b)
        if diff:
            return diff
    return len(segments_a) - len(segments_b)


def is_update_available(installed: str, candidate: str) -> bool:
    """True if the candidate version is strictly newer than the installed one."""
    return compare_versions(installed, candidate) < 0
