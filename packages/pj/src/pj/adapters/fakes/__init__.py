"""Fake adapters for testing.

This module provides test doubles for port interfaces, enabling
deterministic testing without real I/O operations.
"""

from pj.adapters.fakes.fake_archive_extractor import FakeArchiveExtractor
from pj.adapters.fakes.fake_asset_downloader import FakeAssetDownloader
from pj.adapters.fakes.fake_binary_executor import FakeBinaryExecutor
from pj.adapters.fakes.fake_file_checker import FakeFileChecker
from pj.adapters.fakes.fake_locators import FakeExecutableLocator, FakeOverrideResolver
from pj.adapters.fakes.fake_platform_detector import FakePlatformDetector
from pj.adapters.fakes.fake_release_registry import FakeReleaseRegistry
from pj.adapters.fakes.fake_time_provider import FakeTimeProvider
from pj.adapters.fakes.in_memory_metadata_store import InMemoryMetadataStore

__all__ = [
    "FakeArchiveExtractor",
    "FakeAssetDownloader",
    "FakeBinaryExecutor",
    "FakeFileChecker",
    "FakeExecutableLocator",
    "FakeOverrideResolver",
    "FakePlatformDetector",
    "FakeReleaseRegistry",
    "FakeTimeProvider",
    "InMemoryMetadataStore",
]
