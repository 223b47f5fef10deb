"""Version value objects and compatibility rules.

Release versions are semantic versions (``1.11.2``, ``v1.11.2-rc1``) as
printed by the binary or tagged on the registry. The target range is a
hand-written ``major.minor`` pin (``1.11``); any patch release inside it is
compatible.

Parsing never raises: unparsable input yields None so callers can treat
"no version" as an ordinary outcome.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)", re.ASCII)
_TARGET_RE = re.compile(r"(\d+)\.(\d+)", re.ASCII)


@dataclass(frozen=True)
class ParsedVersion:
    """Parsed semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        raw: The input string with any leading ``v`` removed. Trailing
            pre-release or build decoration is kept here but ignored
            everywhere else.
    """

    major: int
    minor: int
    patch: int
    raw: str

    @property
    def key(self) -> tuple[int, int, int]:
        """Ordering key (major, minor, patch)."""
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class TargetRange:
    """A major.minor compatibility band.

    Attributes:
        major: Required major version.
        minor: Required minor version.
    """

    major: int
    minor: int

    def contains(self, version: ParsedVersion) -> bool:
        return version.major == self.major and version.minor == self.minor

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def parse_version(version: str) -> ParsedVersion | None:
    """Parse a semantic version string.

    Accepts ``1.4.1``, ``v1.4.1`` and decorated forms such as ``1.4.1-rc.1``.

    Args:
        version: Version string to parse.

    Returns:
        ParsedVersion, or None if the string does not start with
        ``major.minor.patch`` (after an optional ``v``).
    """
    normalized = version[1:] if version.startswith("v") else version
    match = _VERSION_RE.match(normalized)
    if match is None:
        return None

    return ParsedVersion(
        major=int(match.group(1)),
        minor=int(match.group(2)),
        patch=int(match.group(3)),
        raw=normalized,
    )


def parse_target_range(target: str) -> TargetRange | None:
    """Parse a ``major.minor`` target such as ``1.11``.

    Stricter than parse_version: the whole string must be two dot-separated
    integers. ``1.11.0`` and ``v1.11`` are rejected.

    Args:
        target: Target string to parse.

    Returns:
        TargetRange, or None if the string is not exactly ``major.minor``.
    """
    match = _TARGET_RE.fullmatch(target)
    if match is None:
        return None

    return TargetRange(major=int(match.group(1)), minor=int(match.group(2)))


def is_compatible(version: str, target: str) -> bool:
    """Check whether a version falls inside a target range.

    Example: target ``1.4`` accepts ``1.4.0``, ``1.4.1`` and ``v1.4.99`` but
    not ``1.3.0``, ``1.5.0`` or ``2.4.0``.

    Args:
        version: Version string (see parse_version).
        target: Target range string (see parse_target_range).

    Returns:
        True if major and minor match exactly. False if either side
        fails to parse.
    """
    parsed = parse_version(version)
    target_range = parse_target_range(target)
    if parsed is None or target_range is None:
        return False

    return target_range.contains(parsed)


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings.

    Unparsable input on either side compares equal to everything. Callers
    that need a strict ordering must validate first.

    Returns:
        Negative if a < b, positive if a > b, 0 if equal or unparsable.
    """
    parsed_a = parse_version(a)
    parsed_b = parse_version(b)
    if parsed_a is None or parsed_b is None:
        return 0

    if parsed_a.major != parsed_b.major:
        return parsed_a.major - parsed_b.major
    if parsed_a.minor != parsed_b.minor:
        return parsed_a.minor - parsed_b.minor
    return parsed_a.patch - parsed_b.patch


def select_highest_compatible(versions: Iterable[str], target: str) -> str | None:
    """Pick the highest version inside the target range.

    Args:
        versions: Candidate version strings, in any order.
        target: Target range string, e.g. ``1.4``.

    Returns:
        The highest compatible version exactly as it appeared in
        ``versions``, or None if none is compatible. Among equal versions
        (``v1.4.2`` and ``1.4.2``) the first one wins.
    """
    target_range = parse_target_range(target)
    if target_range is None:
        return None

    best: str | None = None
    best_key: tuple[int, int, int] | None = None

    for candidate in versions:
        parsed = parse_version(candidate)
        if parsed is None or not target_range.contains(parsed):
            continue
        if best_key is None or parsed.key > best_key:
            best = candidate
            best_key = parsed.key

    return best
