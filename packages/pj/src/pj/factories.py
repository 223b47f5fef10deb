"""Factory functions for creating BinaryManager instances.

Wires the real adapters (httpx, subprocess, filesystem) into the use cases.
"""

from __future__ import annotations

from pj.adapters.filesystem import FilesystemFileChecker, PathExecutableLocator
from pj.adapters.httpx_asset_downloader import HttpxAssetDownloader
from pj.adapters.httpx_release_registry import HttpxReleaseRegistry
from pj.adapters.json_metadata_store import JsonMetadataStore
from pj.adapters.paths import get_binary_dir, get_binary_path, get_metadata_path
from pj.adapters.platform_detector import OsPlatformDetector
from pj.adapters.ports import EnvironmentOverrideResolver, RealTimeProvider
from pj.adapters.subprocess_binary_executor import SubprocessBinaryExecutor
from pj.adapters.tar_archive_extractor import TarArchiveExtractor
from pj.domain.settings import BinarySettings
from pj.usecases.artifact_installer import ArtifactInstaller
from pj.usecases.binary_manager import BinaryManager
from pj.usecases.binary_verifier import BinaryVerifier

_default_manager: BinaryManager | None = None


def create_binary_verifier(settings: BinarySettings | None = None) -> BinaryVerifier:
    """Create a BinaryVerifier that runs real processes."""
    settings = settings or BinarySettings()
    return BinaryVerifier(
        file_checker=FilesystemFileChecker(),
        binary_executor=SubprocessBinaryExecutor(),
        timeout=settings.version_timeout,
    )


def create_binary_manager(settings: BinarySettings | None = None) -> BinaryManager:
    """Create a BinaryManager backed by the real adapters.

    Args:
        settings: Settings to use. Defaults to BinarySettings().

    Returns:
        A new BinaryManager. Each call returns an independent instance with
        its own resolved-path state.

    Example:
        >>> manager = create_binary_manager(BinarySettings(target_version="1.11"))
        >>> path = manager.resolve_binary_path()
    """
    settings = settings or BinarySettings()
    verifier = create_binary_verifier(settings)
    installer = ArtifactInstaller(
        downloader=HttpxAssetDownloader(settings),
        extractor=TarArchiveExtractor(),
        verifier=verifier,
        binary_dir=get_binary_dir(settings),
        binary_name=settings.binary_name,
        archive_extension=settings.archive_extension,
    )
    return BinaryManager(
        settings=settings,
        platform_detector=OsPlatformDetector(),
        registry=HttpxReleaseRegistry(settings),
        installer=installer,
        verifier=verifier,
        metadata_store=JsonMetadataStore(get_metadata_path(settings)),
        executable_locator=PathExecutableLocator(),
        override_resolver=EnvironmentOverrideResolver(),
        time_provider=RealTimeProvider(),
        cached_binary_path=get_binary_path(settings),
    )


def get_binary_manager() -> BinaryManager:
    """Return the process-wide BinaryManager, creating it on first use."""
    global _default_manager
    if _default_manager is None:
        _default_manager = create_binary_manager()
    return _default_manager


def reset_binary_manager() -> None:
    """Drop the process-wide BinaryManager so the next call builds a new one."""
    global _default_manager
    _default_manager = None
