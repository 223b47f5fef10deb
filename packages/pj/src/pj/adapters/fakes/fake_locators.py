"""Fake PATH locator and override resolver for testing."""

from __future__ import annotations

from pathlib import Path


class FakeExecutableLocator:
    """Fake implementation of ExecutableLocatorPort for testing.

    Returns the configured path for any name and records the names asked for.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self.lookups: list[str] = []

    def set_path(self, path: Path | None) -> None:
        self._path = path

    def find(self, name: str) -> Path | None:
        self.lookups.append(name)
        return self._path


class FakeOverrideResolver:
    """Fake implementation of OverrideResolverPort for testing."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    def set_path(self, path: Path | None) -> None:
        self._path = path

    def resolve_override(self) -> Path | None:
        return self._path
