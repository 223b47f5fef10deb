"""Fake file checker for testing.

Provides a test double for FileCheckerPort backed by an in-memory map of
known files.
"""

from __future__ import annotations

from pathlib import Path


class FakeFileChecker:
    """Fake implementation of FileCheckerPort for testing.

    Example:
        >>> fake = FakeFileChecker()
        >>> fake.add_file(Path("/usr/bin/pj"))
        >>> fake.exists(Path("/usr/bin/pj")), fake.is_executable(Path("/usr/bin/pj"))
        (True, True)
    """

    def __init__(self) -> None:
        self._files: dict[Path, bool] = {}

    def add_file(self, path: Path, executable: bool = True) -> None:
        """Register a file and whether it is executable."""
        self._files[path] = executable

    def remove_file(self, path: Path) -> None:
        self._files.pop(path, None)

    def exists(self, path: Path) -> bool:
        return path in self._files

    def is_executable(self, path: Path) -> bool:
        return self._files.get(path, False)
