"""
Root conftest.py for the pj-py test suite.

Registers the responsibility (tra) and tier markers, turns tiers into
timeouts, and provides the shared BinaryManager harness fixtures.

Usage:
    @pytest.mark.tier(1)
    @pytest.mark.tra("UseCase.BinaryManager")
    class TestSomething:
        ...

Configuration:
    Set MARKER_ENFORCE=1 to fail collection on missing or malformed markers
    Set TIER_TIMEOUT_MULTIPLIER to scale tier timeouts on slow machines
"""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from pj.adapters.fakes import (
    FakeArchiveExtractor,
    FakeAssetDownloader,
    FakeBinaryExecutor,
    FakeExecutableLocator,
    FakeOverrideResolver,
    FakePlatformDetector,
    FakeReleaseRegistry,
    FakeTimeProvider,
    InMemoryMetadataStore,
)
from pj.adapters.filesystem import FilesystemFileChecker
from pj.adapters.ports import CommandResult
from pj.domain.binary import Asset, CacheMetadata, Release
from pj.domain.settings import BinarySettings
from pj.usecases.artifact_installer import ArtifactInstaller
from pj.usecases.binary_manager import BinaryManager
from pj.usecases.binary_verifier import BinaryVerifier

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.nodes import Item


VALID_TRA_PREFIXES = (
    "Domain.Invariant.",
    "Domain.Policy.",
    "UseCase.",
    "Port.",
    "Adapter.",
    "Contract.",
)

# Tier timeout limits in seconds (0 = no limit)
TIER_TIMEOUTS: dict[int, float] = {
    0: 0.1,
    1: 2.0,
    2: 30.0,
    3: 300.0,
    4: 0,
}


def pytest_configure(config: Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "tra(anchor): responsibility this test protects. Must start with one of: "
        + ", ".join(prefix.rstrip(".") for prefix in VALID_TRA_PREFIXES),
    )
    config.addinivalue_line(
        "markers",
        "tier(level): 0=instant, 1=fast, 2=standard, 3=slow, 4=manual. Sets the timeout.",
    )
    config.addinivalue_line("markers", "unit: Unit tests (no network, no real pj binary)")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")
    config.addinivalue_line("markers", "posix: Tests that run real shell scripts")


def _get_tier(item: Item) -> int | None:
    marker = item.get_closest_marker("tier")
    if marker is None or not marker.args:
        return None
    tier = marker.args[0]
    if isinstance(tier, int) and tier in TIER_TIMEOUTS:
        return tier
    return None


def _marker_errors(items: list[Item]) -> list[str]:
    errors: list[str] = []
    for item in items:
        tra = item.get_closest_marker("tra")
        if tra is None or not tra.args:
            errors.append(f"{item.nodeid}: missing @pytest.mark.tra('...')")
        elif not str(tra.args[0]).startswith(VALID_TRA_PREFIXES):
            errors.append(f"{item.nodeid}: invalid tra anchor {tra.args[0]!r}")

        if _get_tier(item) is None:
            errors.append(f"{item.nodeid}: missing or invalid @pytest.mark.tier()")
    return errors


def _apply_tier_timeouts(items: list[Item]) -> None:
    """Add a timeout marker per tier when pytest-timeout is installed."""
    try:
        import pytest_timeout as _  # type: ignore[import-untyped]  # noqa: F401
    except ImportError:
        return

    multiplier = float(os.environ.get("TIER_TIMEOUT_MULTIPLIER", "1.0"))
    for item in items:
        tier = _get_tier(item)
        if tier is None or item.get_closest_marker("timeout") is not None:
            continue
        timeout = TIER_TIMEOUTS[tier]
        if timeout > 0:
            item.add_marker(pytest.mark.timeout(timeout * multiplier))


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    errors = _marker_errors(items)
    if errors and os.environ.get("MARKER_ENFORCE") == "1":
        pytest.fail("Marker errors:\n" + "\n".join(f"  - {e}" for e in errors), pytrace=False)

    _apply_tier_timeouts(items)


def pytest_report_header(config: Config) -> str:
    return f"marker enforcement: {'strict' if os.environ.get('MARKER_ENFORCE') == '1' else 'off'}"


def make_release(
    version: str, prerelease: bool = False, platforms: tuple[str, ...] = ("linux_amd64",)
) -> Release:
    """Build a Release carrying one tar.gz asset per 'os_arch' platform."""
    assets = tuple(
        Asset(
            name=f"pj_{version}_{platform}.tar.gz",
            download_url=f"https://github.com/josephschmitt/pj/releases/download/v{version}/pj_{version}_{platform}.tar.gz",
            size_bytes=1024,
        )
        for platform in platforms
    )
    return Release(
        tag=f"v{version}",
        version=version,
        title=f"v{version}",
        is_prerelease=prerelease,
        assets=assets,
    )


class ManagerHarness:
    """A BinaryManager wired to fakes, with a real cache directory on disk.

    Binaries are real files so the filesystem checks run for real; what
    they report for '--version' comes from the fake executor.
    """

    def __init__(self, root: Path, target_version: str = "1.11") -> None:
        self.root = root
        self.settings = BinarySettings(target_version=target_version, cache_dir=str(root / "cache"))
        self.cached_path = root / "cache" / "bin" / "pj"
        self.registry = FakeReleaseRegistry()
        self.downloader = FakeAssetDownloader()
        self.extractor = FakeArchiveExtractor()
        self.executor = FakeBinaryExecutor.reporting("1.11.2")
        self.metadata = InMemoryMetadataStore()
        self.locator = FakeExecutableLocator()
        self.override = FakeOverrideResolver()
        self.clock = FakeTimeProvider()
        self.platform_detector = FakePlatformDetector()

        verifier = BinaryVerifier(FilesystemFileChecker(), self.executor)
        installer = ArtifactInstaller(
            downloader=self.downloader,
            extractor=self.extractor,
            verifier=verifier,
            binary_dir=self.cached_path.parent,
        )
        self.manager = BinaryManager(
            settings=self.settings,
            platform_detector=self.platform_detector,
            registry=self.registry,
            installer=installer,
            verifier=verifier,
            metadata_store=self.metadata,
            executable_locator=self.locator,
            override_resolver=self.override,
            time_provider=self.clock,
            cached_binary_path=self.cached_path,
        )

    def publish(self, *versions: str, prerelease: tuple[str, ...] = ()) -> None:
        """Serve these versions (newest first) from the registry."""
        self.registry.set_releases(
            [make_release(v) for v in versions]
            + [make_release(v, prerelease=True) for v in prerelease]
        )

    def make_binary(self, path: Path, version: str | None = "1.11.2") -> Path:
        """Create an executable file; version None makes it fail '--version'."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n")
        path.chmod(0o755)
        if version is None:
            self.executor.set_result(path, CommandResult(exit_code=1, stdout="", stderr="broken"))
        else:
            self.executor.set_version(path, version)
        return path

    def seed_cache(self, version: str = "1.11.2", checked_days_ago: int = 0) -> Path:
        """Put a cached binary and its metadata in place."""
        self.make_binary(self.cached_path, version)
        checked = self.clock.now() - timedelta(days=checked_days_ago)
        self.metadata.save(CacheMetadata(version=version, installed_at=checked, last_update_check=checked))
        self.metadata.saved.clear()
        return self.cached_path

    @property
    def downloads(self) -> list[str]:
        return [name for name, _ in self.downloader.calls]


@pytest.fixture
def harness(tmp_path: Path) -> ManagerHarness:
    """BinaryManager over fakes rooted in a temporary directory."""
    return ManagerHarness(tmp_path)


@pytest.fixture
def release_factory():
    """Return make_release for tests that need custom releases."""
    return make_release
