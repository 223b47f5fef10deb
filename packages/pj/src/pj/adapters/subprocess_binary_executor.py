"""Subprocess implementation of the BinaryExecutorPort."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from pj.adapters.ports import BinaryExecutorPort, CommandResult
from pj.domain.exceptions import ExecutionError


class SubprocessBinaryExecutor:
    """Adapter that runs an executable with subprocess.run.

    Output is captured as UTF-8 text; undecodable bytes are replaced. A non-zero exit status is returned in the
    CommandResult; only spawn failures and timeouts raise.
    """

    def run(self, path: Path, args: Sequence[str], timeout: float) -> CommandResult:
        """Run an executable and capture its output.

        Args:
            path: Executable to run.
            args: Arguments to pass.
            timeout: Seconds to wait before killing the process.

        Returns:
            CommandResult with exit code, stdout and stderr.

        Raises:
            ExecutionError: If the process cannot be started or times out.
        """
        try:
            completed = subprocess.run(
                [str(path), *args],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(
                f"{path} did not finish within {timeout}s",
                stderr=_decode(e.stderr),
            ) from e
        except OSError as e:
            raise ExecutionError(f"Failed to run {path}: {e}") from e

        return CommandResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


def _decode(output: str | bytes | None) -> str | None:
    if isinstance(output, bytes):
        return output.decode(errors="replace")
    return output


# Runtime protocol check
assert isinstance(SubprocessBinaryExecutor(), BinaryExecutorPort)
