"""Port interfaces for the pj binary manager.

Ports define the contracts that adapters must implement.
These are Protocol classes (structural subtyping) for flexible testing.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from pj.domain.binary import DownloadProgress

if TYPE_CHECKING:
    from pj.domain.binary import Asset, CacheMetadata, Platform, Release

ProgressCallback = Optional[Callable[[DownloadProgress], None]]

OVERRIDE_ENV_VAR = "PJ_BINARY_PATH"


@dataclass(frozen=True)
class CommandResult:
    """Result of running an executable to completion.

    Attributes:
        exit_code: Process exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    exit_code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@runtime_checkable
class PlatformDetectorPort(Protocol):
    """Port interface for detecting the host platform.

    Contract:
        - detect() returns a Platform with registry naming filled in
        - Raises UnsupportedPlatformError for hosts with no release assets
    """

    def detect(self) -> Platform:
        """Detect the current platform.

        Returns:
            Platform value object.

        Raises:
            UnsupportedPlatformError: If the OS or architecture has no mapping.
        """
        ...


@runtime_checkable
class ReleaseRegistryPort(Protocol):
    """Port interface for querying published releases.

    Contract:
        - list_releases() excludes prereleases, newest first
        - get_latest_release() may return a prerelease
        - get_release_by_tag() normalizes the tag to carry a leading 'v'
        - Every failure is raised as RegistryError
    """

    def list_releases(self) -> list[Release]:
        """List published non-prerelease releases, newest first.

        Raises:
            RegistryError: On transport failure, non-2xx status or bad payload.
        """
        ...

    def get_latest_release(self) -> Release:
        """Fetch the registry's most recent release.

        Raises:
            RegistryError: On transport failure, non-2xx status or bad payload.
        """
        ...

    def get_release_by_tag(self, tag: str) -> Release:
        """Fetch one release by tag ('1.11.0' and 'v1.11.0' are equivalent).

        Raises:
            RegistryError: On transport failure, non-2xx status or bad payload.
        """
        ...


@runtime_checkable
class AssetDownloaderPort(Protocol):
    """Port interface for streaming a release asset to disk.

    Contract:
        - download() writes the full body to destination
        - on_progress, when given, is called once per received chunk
        - Raises DownloadError on transport failure, non-2xx or empty body
    """

    def download(
        self,
        asset: Asset,
        destination: Path,
        on_progress: ProgressCallback = None,
    ) -> None:
        """Download an asset.

        Args:
            asset: Asset to fetch.
            destination: File to write. The parent directory must exist.
            on_progress: Optional per-chunk progress callback.

        Raises:
            DownloadError: If the download fails or the body is empty.
        """
        ...


@runtime_checkable
class ArchiveExtractorPort(Protocol):
    """Port interface for pulling the executable out of a release archive.

    Contract:
        - Only the entry whose base name equals executable_name is written
        - The output path is destination_dir / executable_name, whatever
          directory the entry lives in inside the archive
    """

    def extract_executable(
        self,
        archive_path: Path,
        destination_dir: Path,
        executable_name: str,
    ) -> Path:
        """Extract the executable.

        Returns:
            Path of the extracted file.

        Raises:
            ArchiveExtractionError: If the entry is missing or the archive
                cannot be read.
        """
        ...


@runtime_checkable
class BinaryExecutorPort(Protocol):
    """Port interface for running an executable and capturing its output.

    Contract:
        - run() waits for the process and returns its exit code and output
        - A non-zero exit code is a normal result, not an exception
        - Raises ExecutionError if the process cannot start or times out
    """

    def run(self, path: Path, args: Sequence[str], timeout: float) -> CommandResult:
        """Run an executable.

        Args:
            path: Executable to run.
            args: Arguments to pass.
            timeout: Seconds to wait before giving up.

        Returns:
            CommandResult with exit code and captured output.

        Raises:
            ExecutionError: On spawn failure or timeout.
        """
        ...


@runtime_checkable
class FileCheckerPort(Protocol):
    """Port interface for file system checks.

    Contract:
        - exists(path) returns True if a regular file exists at path
        - is_executable(path) returns True if the current user may execute it
    """

    def exists(self, path: Path) -> bool:
        ...

    def is_executable(self, path: Path) -> bool:
        ...


@runtime_checkable
class MetadataStorePort(Protocol):
    """Port interface for the persisted cache metadata record.

    Contract:
        - load() returns None when the record is absent or unreadable
        - save() replaces the whole record
        - delete() tolerates an absent record
    """

    def load(self) -> CacheMetadata | None:
        ...

    def save(self, metadata: CacheMetadata) -> None:
        ...

    def delete(self) -> None:
        ...


@runtime_checkable
class ExecutableLocatorPort(Protocol):
    """Port interface for searching the executable search path.

    Contract:
        - find(name) returns the first matching executable file, or None
    """

    def find(self, name: str) -> Path | None:
        ...


@runtime_checkable
class OverrideResolverPort(Protocol):
    """Port interface for the operator-supplied binary override.

    Contract:
        - resolve_override() returns the override path, or None if unset
    """

    def resolve_override(self) -> Path | None:
        ...


class EnvironmentOverrideResolver:
    """Default implementation: read the override from PJ_BINARY_PATH.

    The value is stripped of surrounding whitespace. An unset or blank
    variable means no override.
    """

    def resolve_override(self) -> Path | None:
        """Resolve the override path from PJ_BINARY_PATH.

        Returns:
            The override path, or None if the variable is unset or blank.
        """
        value = os.environ.get(OVERRIDE_ENV_VAR, "").strip()
        if not value:
            return None
        return Path(value)


@runtime_checkable
class TimeProvider(Protocol):
    """Port interface for the current time.

    Contract:
        - now() returns a timezone-aware UTC datetime
    """

    def now(self) -> datetime:
        ...


class RealTimeProvider:
    """Default implementation: provides real system time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
