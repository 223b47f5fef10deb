"""Filesystem adapters: file checks and executable search path lookup.

Implements FileCheckerPort and ExecutableLocatorPort. Neither adapter
downloads or modifies anything.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pj.adapters.ports import ExecutableLocatorPort, FileCheckerPort


class FilesystemFileChecker:
    """Adapter answering existence and permission questions via os/pathlib."""

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def is_executable(self, path: Path) -> bool:
        return os.access(path, os.X_OK)


class PathExecutableLocator:
    """Adapter that searches the PATH environment variable for an executable.

    Directories are tried in PATH order and the first regular file the
    current user may execute wins. On Windows the '.exe' suffix is added to
    names that lack it.
    """

    def find(self, name: str) -> Path | None:
        """Find an executable on PATH.

        Args:
            name: Base executable name, e.g. 'pj'.

        Returns:
            Path to the first matching executable, or None.
        """
        if sys.platform == "win32" and not name.lower().endswith(".exe"):
            name = f"{name}.exe"

        for path in self._get_path_locations(name):
            if path.is_file() and os.access(path, os.X_OK):
                return path

        return None

    def _get_path_locations(self, name: str) -> list[Path]:
        """Get list of candidate executable paths from PATH.

        Returns:
            List of Path objects, one per non-empty PATH entry.
        """
        path_env = os.environ.get("PATH", "")
        if not path_env:
            return []

        paths: list[Path] = []
        for dir_path in path_env.split(os.pathsep):
            if dir_path:
                paths.append(Path(dir_path) / name)

        return paths


# Runtime protocol check
assert isinstance(FilesystemFileChecker(), FileCheckerPort)
assert isinstance(PathExecutableLocator(), ExecutableLocatorPort)
