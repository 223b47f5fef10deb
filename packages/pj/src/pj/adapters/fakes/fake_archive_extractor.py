"""Fake archive extractor for testing.

Provides a test double for ArchiveExtractorPort that writes a configured
executable body without reading the archive.
"""

from __future__ import annotations

from pathlib import Path


class FakeArchiveExtractor:
    """Fake implementation of ArchiveExtractorPort for testing.

    Writes the configured content to ``destination_dir / executable_name``
    and records (archive_path, destination_dir, executable_name) per call.
    The archive must exist when extraction is requested.
    """

    def __init__(self, content: bytes = b"#!/bin/sh\necho 'pj version 1.11.2'\n") -> None:
        self._content = content
        self._exception: BaseException | None = None
        self._calls: list[tuple[Path, Path, str]] = []

    @property
    def calls(self) -> list[tuple[Path, Path, str]]:
        return self._calls

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from extract_executable(), or None to clear."""
        self._exception = exception

    def extract_executable(
        self,
        archive_path: Path,
        destination_dir: Path,
        executable_name: str,
    ) -> Path:
        self._calls.append((archive_path, destination_dir, executable_name))
        assert archive_path.exists(), f"archive {archive_path} was not downloaded"

        if self._exception is not None:
            raise self._exception

        destination_dir.mkdir(parents=True, exist_ok=True)
        destination = destination_dir / executable_name
        destination.write_bytes(self._content)
        return destination
