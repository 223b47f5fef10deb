"""Interface adapters: filesystem, subprocess and HTTP implementations of the ports."""

from pj.adapters.ports import (
    ArchiveExtractorPort,
    AssetDownloaderPort,
    BinaryExecutorPort,
    CommandResult,
    EnvironmentOverrideResolver,
    ExecutableLocatorPort,
    FileCheckerPort,
    MetadataStorePort,
    OverrideResolverPort,
    PlatformDetectorPort,
    RealTimeProvider,
    ReleaseRegistryPort,
    TimeProvider,
)
from pj.adapters.filesystem import FilesystemFileChecker, PathExecutableLocator
from pj.adapters.httpx_asset_downloader import HttpxAssetDownloader
from pj.adapters.httpx_release_registry import HttpxReleaseRegistry
from pj.adapters.json_metadata_store import JsonMetadataStore
from pj.adapters.platform_detector import (
    OsPlatformDetector,
    is_host_supported,
    resolve_host_platform,
)
from pj.adapters.subprocess_binary_executor import SubprocessBinaryExecutor
from pj.adapters.tar_archive_extractor import TarArchiveExtractor

__all__ = [
    "ArchiveExtractorPort",
    "AssetDownloaderPort",
    "BinaryExecutorPort",
    "CommandResult",
    "EnvironmentOverrideResolver",
    "ExecutableLocatorPort",
    "FileCheckerPort",
    "MetadataStorePort",
    "OverrideResolverPort",
    "PlatformDetectorPort",
    "RealTimeProvider",
    "ReleaseRegistryPort",
    "TimeProvider",
    "FilesystemFileChecker",
    "PathExecutableLocator",
    "HttpxAssetDownloader",
    "HttpxReleaseRegistry",
    "JsonMetadataStore",
    "OsPlatformDetector",
    "is_host_supported",
    "resolve_host_platform",
    "SubprocessBinaryExecutor",
    "TarArchiveExtractor",
]
