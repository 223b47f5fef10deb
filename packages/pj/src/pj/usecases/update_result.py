"""Result of an opportunistic update attempt."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class UpdateAttemptResult:
    """Outcome of a best-effort cache refresh.

    Immutable value object returned instead of raising, so callers decide
    explicitly what to do with a failed attempt.

    Attributes:
        success: True if the refresh completed.
        path: Path to the (possibly new) cached binary on success.
        error: Error message on failure, None otherwise.
    """

    success: bool
    path: Path | None
    error: str | None

    @classmethod
    def create_success(cls, path: Path) -> UpdateAttemptResult:
        return cls(success=True, path=path, error=None)

    @classmethod
    def create_failure(cls, error: str) -> UpdateAttemptResult:
        """Create a failure result with error message.

        Args:
            error: Description of the error that occurred.

        Returns:
            UpdateAttemptResult indicating failure.
        """
        return cls(success=False, path=None, error=error)
