"""Binary verifier use case for checking that a pj executable works.

Verification is behavioral only: the file must be executable and
``<binary> --version`` must exit cleanly and print a parseable version.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pj.adapters.ports import BinaryExecutorPort, FileCheckerPort
from pj.domain.exceptions import ExecutionError

logger = logging.getLogger(__name__)

# pj prints e.g. "pj version 1.11.2" or "v1.11.2"
_VERSION_OUTPUT_RE = re.compile(
    r"(?:pj\s+)?(?:version\s+)?v?(\d+\.\d+\.\d+)", re.IGNORECASE
)

VERSION_FLAG = "--version"


class InstallationStatus(Enum):
    """Status of a pj binary check.

    Attributes:
        OK: Binary exists, is executable, and reports a version.
        MISSING: No path given, or nothing exists at the path.
        CORRUPT: Binary runs badly: it fails to start, times out, exits
            non-zero or prints no version.
        UNUSABLE: Binary exists but lacks execute permissions.
    """

    OK = "ok"
    MISSING = "missing"
    CORRUPT = "corrupt"
    UNUSABLE = "unusable"


@dataclass(frozen=True)
class InstallationCheckResult:
    """Result of a binary check.

    Attributes:
        status: The installation status.
        binary_path: Path that was checked, or None if not provided.
        version: Version reported by the binary, None unless status is OK.
        error_message: Error details for failed checks, None for success.
    """

    status: InstallationStatus
    binary_path: Path | None
    version: str | None
    error_message: str | None

    @property
    def is_ok(self) -> bool:
        return self.status is InstallationStatus.OK

    @classmethod
    def create_success(cls, binary_path: Path, version: str) -> InstallationCheckResult:
        """Create a successful check result.

        Args:
            binary_path: Path to the verified binary.
            version: Version the binary reported.

        Returns:
            InstallationCheckResult with OK status and no error message.
        """
        return cls(
            status=InstallationStatus.OK,
            binary_path=binary_path,
            version=version,
            error_message=None,
        )

    @classmethod
    def create_failure(
        cls,
        status: InstallationStatus,
        binary_path: Path | None,
        error_message: str,
    ) -> InstallationCheckResult:
        """Create a failed check result.

        Args:
            status: The failure status (MISSING, CORRUPT, or UNUSABLE).
            binary_path: Path to the binary, or None if not provided.
            error_message: Description of why the check failed.

        Returns:
            InstallationCheckResult with the specified failure status.
        """
        return cls(
            status=status,
            binary_path=binary_path,
            version=None,
            error_message=error_message,
        )


def extract_version(output: str) -> str | None:
    """Pull a 'major.minor.patch' version out of '--version' output."""
    match = _VERSION_OUTPUT_RE.search(output)
    if match is None:
        return None
    return match.group(1)


class BinaryVerifier:
    """Use case for checking a pj binary.

    Verifies a binary by checking:
    1. A file exists at the path
    2. The file has execute permissions
    3. ``--version`` runs within the timeout, exits 0 and prints a version

    Verification failures are results, never exceptions.
    """

    def __init__(
        self,
        file_checker: FileCheckerPort,
        binary_executor: BinaryExecutorPort,
        timeout: float = 5.0,
    ) -> None:
        """Initialize the binary verifier.

        Args:
            file_checker: Port for checking file existence and permissions.
            binary_executor: Port for running the version query.
            timeout: Seconds the version query may take.
        """
        self._file_checker = file_checker
        self._binary_executor = binary_executor
        self._timeout = timeout

    def check(self, binary_path: Path | None) -> InstallationCheckResult:
        """Check the binary at the given path.

        Returns:
            InstallationCheckResult with:
            - OK and the version if the binary is fully functional
            - MISSING if path is None or file doesn't exist
            - UNUSABLE if file exists but isn't executable
            - CORRUPT if the version query fails
        """
        if binary_path is None:
            return InstallationCheckResult.create_failure(
                status=InstallationStatus.MISSING,
                binary_path=None,
                error_message="Binary path not provided",
            )

        if not self._file_checker.exists(binary_path):
            return InstallationCheckResult.create_failure(
                status=InstallationStatus.MISSING,
                binary_path=binary_path,
                error_message=f"Binary does not exist at {binary_path}",
            )

        if not self._file_checker.is_executable(binary_path):
            return InstallationCheckResult.create_failure(
                status=InstallationStatus.UNUSABLE,
                binary_path=binary_path,
                error_message=f"Binary at {binary_path} is not executable",
            )

        try:
            result = self._binary_executor.run(
                binary_path, [VERSION_FLAG], timeout=self._timeout
            )
        except ExecutionError as e:
            logger.debug(f"Version query failed for {binary_path}: {e.message}")
            return InstallationCheckResult.create_failure(
                status=InstallationStatus.CORRUPT,
                binary_path=binary_path,
                error_message=f"Binary failed to run: {e.message}",
            )

        if not result.succeeded:
            return InstallationCheckResult.create_failure(
                status=InstallationStatus.CORRUPT,
                binary_path=binary_path,
                error_message=(
                    f"Binary exited with status {result.exit_code}: "
                    f"{result.stderr.strip()}"
                ),
            )

        version = extract_version(result.stdout)
        if version is None:
            return InstallationCheckResult.create_failure(
                status=InstallationStatus.CORRUPT,
                binary_path=binary_path,
                error_message=(
                    f"Binary printed no version: {result.stdout.strip()!r}"
                ),
            )

        return InstallationCheckResult.create_success(binary_path, version)

    def is_valid(self, binary_path: Path) -> bool:
        """Return True if the binary passes every check."""
        return self.check(binary_path).is_ok

    def read_version(self, binary_path: Path) -> str | None:
        """Return the version the binary reports, or None on any failure."""
        return self.check(binary_path).version
