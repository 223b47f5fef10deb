"""Artifact installer use case: download, extract and verify one release."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from pj.adapters.paths import executable_name
from pj.adapters.ports import (
    ArchiveExtractorPort,
    AssetDownloaderPort,
    ProgressCallback,
)
from pj.domain.binary import Platform, Release, expected_asset_name
from pj.domain.exceptions import BinaryVerificationError, NoMatchingAssetError
from pj.usecases.binary_verifier import BinaryVerifier

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


class ArtifactInstaller:
    """Installs the executable from a release into the binary directory.

    Steps, in order:
    1. Pick the asset named for this platform
    2. Stream it into the binary directory
    3. Extract only the executable into a private staging directory
    4. Delete the archive
    5. Mark the executable as executable (non-Windows)
    6. Verify it runs and reports a version
    7. Move it over the resident executable with os.replace

    The resident executable is untouched until step 7, so a failure at any
    earlier step leaves the previous install in place. The installer never
    writes cache metadata; that is the caller's job once this returns.
    """

    def __init__(
        self,
        downloader: AssetDownloaderPort,
        extractor: ArchiveExtractorPort,
        verifier: BinaryVerifier,
        binary_dir: Path,
        binary_name: str = "pj",
        archive_extension: str = "tar.gz",
    ) -> None:
        """Initialize the installer.

        Args:
            downloader: Port for streaming release assets.
            extractor: Port for pulling the executable out of an archive.
            verifier: Checks the extracted executable before it goes live.
            binary_dir: Directory holding the resident executable.
            binary_name: Base executable name, without '.exe'.
            archive_extension: Extension of release archives.
        """
        self._downloader = downloader
        self._extractor = extractor
        self._verifier = verifier
        self._binary_dir = binary_dir
        self._binary_name = binary_name
        self._archive_extension = archive_extension

    def install(
        self,
        release: Release,
        platform: Platform,
        on_progress: ProgressCallback = None,
    ) -> Path:
        """Install the executable from a release.

        Args:
            release: Release to install from.
            platform: Platform whose asset should be used.
            on_progress: Optional download progress callback.

        Returns:
            Path to the installed executable.

        Raises:
            NoMatchingAssetError: If the release has no asset for the platform.
            DownloadError: If the asset cannot be downloaded.
            ArchiveExtractionError: If the archive has no executable.
            BinaryVerificationError: If the extracted executable does not run.
            OSError: On filesystem failures.
        """
        asset_name = expected_asset_name(
            release.version,
            platform,
            binary_name=self._binary_name,
            archive_extension=self._archive_extension,
        )
        asset = release.find_asset(asset_name)
        if asset is None:
            raise NoMatchingAssetError(asset_name, platform.label)

        exe_name = executable_name(self._binary_name, windows=platform.is_windows)
        target = self._binary_dir / exe_name
        archive_path = self._binary_dir / asset_name

        logger.info(f"Installing pj {release.version} for {platform.label}")
        self._binary_dir.mkdir(parents=True, exist_ok=True)
        staging_dir = Path(tempfile.mkdtemp(prefix=".staging-", dir=self._binary_dir))
        try:
            try:
                self._downloader.download(asset, archive_path, on_progress)
                extracted = self._extractor.extract_executable(
                    archive_path, staging_dir, exe_name
                )
            finally:
                archive_path.unlink(missing_ok=True)

            if not platform.is_windows:
                extracted.chmod(EXECUTABLE_MODE)

            if not self._verifier.is_valid(extracted):
                raise BinaryVerificationError(str(target))

            os.replace(extracted, target)
        finally:
            shutil.rmtree(staging_dir, ignore_errors=True)

        logger.info(f"Installed pj {release.version} at {target}")
        return target
