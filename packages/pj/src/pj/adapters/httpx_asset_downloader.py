"""HTTPX-based implementation of the AssetDownloaderPort.

This adapter streams release archives to disk with per-chunk progress.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from pj.adapters.ports import AssetDownloaderPort, ProgressCallback
from pj.domain.binary import Asset, DownloadProgress
from pj.domain.exceptions import DownloadError
from pj.domain.settings import BinarySettings

logger = logging.getLogger(__name__)


class HttpxAssetDownloader:
    """HTTPX-based adapter for downloading release assets.

    Streams the response body to the destination file chunk by chunk,
    following redirects (GitHub serves assets from a CDN). Progress is
    computed against the asset's declared size, not Content-Length.

    Attributes:
        settings: Supplies download_timeout and user_agent.
    """

    def __init__(
        self,
        settings: BinarySettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the downloader.

        Args:
            settings: Timeout and user agent configuration.
            client: Optional httpx.Client for dependency injection (testing).
                   If not provided, a new client is created per download.
        """
        self._settings = settings or BinarySettings()
        self._client = client

    def download(
        self,
        asset: Asset,
        destination: Path,
        on_progress: ProgressCallback = None,
    ) -> None:
        """Download an asset to a local file.

        Args:
            asset: Asset to fetch.
            destination: File to write. The parent directory must exist.
            on_progress: Called once per received chunk.

        Raises:
            DownloadError: On transport failure, malformed URL, non-2xx status
                or empty body.
            OSError: If the destination cannot be written.
        """
        logger.debug(f"Downloading {asset.name} from {asset.download_url}")
        try:
            if self._client is not None:
                written = self._stream(self._client, asset, destination, on_progress)
            else:
                with httpx.Client() as client:
                    written = self._stream(client, asset, destination, on_progress)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            destination.unlink(missing_ok=True)
            raise DownloadError(
                f"Failed to download {asset.name}: {e}",
                url=asset.download_url,
                original_error=e,
            ) from e

        if written == 0:
            destination.unlink(missing_ok=True)
            raise DownloadError(
                f"Failed to download {asset.name}: Response body is empty",
                url=asset.download_url,
            )

        logger.debug(f"Downloaded {written} bytes to {destination}")

    def _stream(
        self,
        client: httpx.Client,
        asset: Asset,
        destination: Path,
        on_progress: ProgressCallback,
    ) -> int:
        with client.stream(
            "GET",
            asset.download_url,
            headers={"User-Agent": self._settings.user_agent},
            follow_redirects=True,
            timeout=self._settings.download_timeout,
        ) as response:
            if not response.is_success:
                raise DownloadError(
                    f"Failed to download {asset.name}: HTTP {response.status_code} "
                    f"{response.reason_phrase}",
                    url=asset.download_url,
                    status_code=response.status_code,
                )

            downloaded = 0
            with destination.open("wb") as f:
                for chunk in response.iter_bytes():
                    if not chunk:
                        continue
                    f.write(chunk)
                    downloaded += len(chunk)
                    if on_progress is not None:
                        on_progress(
                            DownloadProgress.from_counts(downloaded, asset.size_bytes)
                        )
            return downloaded


# Runtime protocol check
assert isinstance(HttpxAssetDownloader(), AssetDownloaderPort)
