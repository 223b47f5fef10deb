"""Fake asset downloader for testing.

Provides a test double for AssetDownloaderPort that writes preconfigured
bytes instead of making network calls.
"""

from __future__ import annotations

from pathlib import Path

from pj.adapters.ports import ProgressCallback
from pj.domain.binary import Asset, DownloadProgress


class FakeAssetDownloader:
    """Fake implementation of AssetDownloaderPort for testing.

    Writes the configured content to the destination and reports a single
    progress event for it. Records (asset name, destination) for every call.
    """

    def __init__(self, content: bytes = b"fake archive") -> None:
        self._content = content
        self._exception: BaseException | None = None
        self._calls: list[tuple[str, Path]] = []

    @property
    def calls(self) -> list[tuple[str, Path]]:
        """Return list of (asset name, destination) tuples from download() calls."""
        return self._calls

    def set_content(self, content: bytes) -> None:
        self._content = content

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from download(), or None to clear."""
        self._exception = exception

    def clear_calls(self) -> None:
        self._calls.clear()

    def download(
        self,
        asset: Asset,
        destination: Path,
        on_progress: ProgressCallback = None,
    ) -> None:
        self._calls.append((asset.name, destination))

        if self._exception is not None:
            raise self._exception

        destination.write_bytes(self._content)
        if on_progress is not None:
            on_progress(DownloadProgress.from_counts(len(self._content), asset.size_bytes))
