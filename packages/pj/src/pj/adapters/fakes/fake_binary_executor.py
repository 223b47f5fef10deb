"""Fake binary executor for testing.

Provides a test double for BinaryExecutorPort that returns canned command
results per path instead of spawning processes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pj.adapters.ports import CommandResult
from pj.domain.exceptions import ExecutionError


class FakeBinaryExecutor:
    """Fake implementation of BinaryExecutorPort for testing.

    Results are looked up by exact path, then fall back to the default.
    Paths with no result and no default raise ExecutionError, as a missing
    executable would.

    Example:
        >>> fake = FakeBinaryExecutor()
        >>> fake.set_version(Path("/usr/bin/pj"), "1.11.2")
        >>> fake.run(Path("/usr/bin/pj"), ["--version"], timeout=5.0).stdout
        'pj version 1.11.2\\n'
    """

    def __init__(self, default: CommandResult | None = None) -> None:
        """Initialize the fake.

        Args:
            default: Result for paths without a configured result.
        """
        self._default = default
        self._results: dict[Path, CommandResult | BaseException] = {}
        self._calls: list[tuple[Path, tuple[str, ...], float]] = []

    @classmethod
    def reporting(cls, version: str) -> FakeBinaryExecutor:
        """Create a fake where every binary reports the given version."""
        return cls(default=CommandResult(exit_code=0, stdout=f"pj version {version}\n", stderr=""))

    @property
    def calls(self) -> list[tuple[Path, tuple[str, ...], float]]:
        """Return list of (path, args, timeout) tuples from run() calls."""
        return self._calls

    @property
    def called_paths(self) -> list[Path]:
        return [path for path, _, _ in self._calls]

    def set_result(self, path: Path, result: CommandResult | BaseException) -> None:
        """Configure the result (or exception to raise) for one path."""
        self._results[path] = result

    def set_version(self, path: Path, version: str) -> None:
        self.set_result(
            path, CommandResult(exit_code=0, stdout=f"pj version {version}\n", stderr="")
        )

    def set_default(self, default: CommandResult | None) -> None:
        self._default = default

    def clear_calls(self) -> None:
        self._calls.clear()

    def run(self, path: Path, args: Sequence[str], timeout: float) -> CommandResult:
        self._calls.append((path, tuple(args), timeout))

        result = self._results.get(path, self._default)
        if result is None:
            raise ExecutionError(f"Failed to run {path}: no such file")
        if isinstance(result, BaseException):
            raise result
        return result
