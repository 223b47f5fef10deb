"""Domain exceptions.

Exception hierarchy:
- PjError: Base for everything raised by this package.
  - PjConfigError: Invalid BinarySettings values.
  - PjBinaryError: Base for binary lifecycle failures (resolve, install, update).
    - UnsupportedPlatformError, InvalidOverrideError, NoCompatibleReleaseError,
      NoMatchingAssetError, RegistryError, DownloadError,
      ArchiveExtractionError, BinaryVerificationError
  - ExecutionError: Running the pj binary failed. The resolution flow treats
    it as "binary invalid" and never lets it reach resolve_binary_path callers.
"""

from __future__ import annotations

from collections.abc import Sequence


class PjError(Exception):
    """Base exception for the pj package."""

    pass


class PjConfigError(PjError):
    """Raised when BinarySettings are invalid.

    Raised by domain value objects from ``__post_init__`` when a field
    fails validation (e.g., a malformed target version).
    """

    pass


class PjBinaryError(PjError):
    """Raised when a pj binary operation fails.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnsupportedPlatformError(PjBinaryError):
    """Raised when the host OS or architecture has no release asset mapping.

    Attributes:
        os_name: Host operating system as reported by the platform module.
        arch: Host machine type as reported by the platform module.
    """

    def __init__(
        self,
        message: str,
        os_name: str | None = None,
        arch: str | None = None,
    ) -> None:
        super().__init__(message)
        self.os_name = os_name
        self.arch = arch


class InvalidOverrideError(PjBinaryError):
    """Raised when PJ_BINARY_PATH is set but does not point at a working binary.

    Attributes:
        path: The override path that failed verification.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"PJ_BINARY_PATH is set but binary is not valid: {path}")
        self.path = path


class NoCompatibleReleaseError(PjBinaryError):
    """Raised when no published release falls inside the target range.

    Attributes:
        target: The major.minor target range that was requested.
        available_versions: Every version the registry listed.
    """

    def __init__(self, target: str, available_versions: Sequence[str]) -> None:
        listed = ", ".join(available_versions) if available_versions else "none"
        super().__init__(
            f"No release compatible with pj {target}.x found. "
            f"Available versions: {listed}"
        )
        self.target = target
        self.available_versions = list(available_versions)


class NoMatchingAssetError(PjBinaryError):
    """Raised when the selected release has no asset for this platform.

    Attributes:
        expected_asset: Asset filename that was looked for.
        platform: Registry platform label, e.g. ``linux/amd64``.
    """

    def __init__(self, expected_asset: str, platform: str) -> None:
        super().__init__(
            f"No binary available for {platform}. Expected asset: {expected_asset}"
        )
        self.expected_asset = expected_asset
        self.platform = platform


class RegistryError(PjBinaryError):
    """Raised when the release registry cannot be queried.

    Covers non-2xx responses, transport failures and malformed payloads.

    Attributes:
        url: The registry URL that was requested.
        status_code: HTTP status code, or None for transport/payload failures.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.original_error = original_error


class DownloadError(PjBinaryError):
    """Raised when a release asset download fails.

    Attributes:
        url: The URL that failed to download.
        status_code: HTTP status code, or None for transport failures.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.original_error = original_error


class ArchiveExtractionError(PjBinaryError):
    """Raised when the executable cannot be extracted from a release archive.

    Attributes:
        archive_path: Path to the archive that was opened.
        executable_name: Base name of the entry that was looked for.
    """

    def __init__(self, message: str, archive_path: str, executable_name: str) -> None:
        super().__init__(message)
        self.archive_path = archive_path
        self.executable_name = executable_name


class BinaryVerificationError(PjBinaryError):
    """Raised when a freshly installed binary fails its version check.

    Attributes:
        path: Path of the binary that failed verification.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Downloaded binary failed verification: {path}")
        self.path = path


class ExecutionError(PjError):
    """Raised when running the pj binary fails.

    Attributes:
        message: Human-readable error description.
        exit_code: Process exit code, or None if the process never exited
            normally (spawn failure, timeout).
        stderr: Captured standard error, if any.
    """

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.stderr = stderr
