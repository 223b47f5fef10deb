"""Binary-related domain value objects.

This module contains value objects for managing the pj binary: the host
platform and its registry naming, registry releases and their assets,
the persisted cache metadata record, and the status reported to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal

from pj.domain.exceptions import UnsupportedPlatformError

RegistryOs = Literal["darwin", "linux", "windows"]
RegistryArch = Literal["amd64", "arm64"]

_REGISTRY_OS: tuple[str, ...] = ("darwin", "linux", "windows")
_REGISTRY_ARCH: tuple[str, ...] = ("amd64", "arm64")


@dataclass(frozen=True)
class Platform:
    """Platform value object pairing host identity with registry naming.

    Attributes:
        host_os: Operating system as reported by the host (e.g. 'Linux').
        host_arch: Machine type as reported by the host (e.g. 'x86_64').
        registry_os: OS name used in asset filenames: 'darwin', 'linux'
            or 'windows'.
        registry_arch: Architecture name used in asset filenames: 'amd64'
            or 'arm64'.
    """

    host_os: str
    host_arch: str
    registry_os: RegistryOs
    registry_arch: RegistryArch

    def __post_init__(self) -> None:
        """Validate registry naming."""
        if self.registry_os not in _REGISTRY_OS:
            raise UnsupportedPlatformError(
                f"registry_os must be one of {_REGISTRY_OS}, got: {self.registry_os!r}",
                os_name=self.host_os,
                arch=self.host_arch,
            )
        if self.registry_arch not in _REGISTRY_ARCH:
            raise UnsupportedPlatformError(
                f"registry_arch must be one of {_REGISTRY_ARCH}, got: {self.registry_arch!r}",
                os_name=self.host_os,
                arch=self.host_arch,
            )

    @property
    def is_windows(self) -> bool:
        return self.registry_os == "windows"

    @property
    def label(self) -> str:
        """Registry platform label, e.g. 'linux/amd64'."""
        return f"{self.registry_os}/{self.registry_arch}"


def expected_asset_name(
    version: str,
    platform: Platform,
    binary_name: str = "pj",
    archive_extension: str = "tar.gz",
) -> str:
    """Compute the release asset filename for a version and platform.

    Example: ``expected_asset_name("v1.4.1", darwin/arm64)`` returns
    ``pj_1.4.1_darwin_arm64.tar.gz``.

    Args:
        version: Release version, with or without a leading 'v'.
        platform: Target platform.
        binary_name: Base name of the binary.
        archive_extension: Archive extension without the leading dot.

    Returns:
        The asset filename.
    """
    bare_version = version[1:] if version.startswith("v") else version
    return (
        f"{binary_name}_{bare_version}_{platform.registry_os}_"
        f"{platform.registry_arch}.{archive_extension}"
    )


@dataclass(frozen=True)
class Asset:
    """A downloadable file attached to a release.

    Attributes:
        name: Asset filename (e.g. 'pj_1.11.0_linux_amd64.tar.gz').
        download_url: URL the asset body is served from.
        size_bytes: Declared size in bytes, used for progress reporting.
        content_type: Declared MIME type.
    """

    name: str
    download_url: str
    size_bytes: int
    content_type: str = "application/octet-stream"

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            raise ValueError(f"size_bytes must be non-negative, got: {self.size_bytes}")


@dataclass(frozen=True)
class Release:
    """A published release on the registry.

    Attributes:
        tag: Release tag (e.g. 'v1.11.0').
        version: Tag without the leading 'v'.
        title: Release title.
        is_prerelease: True if the registry flags this release as a prerelease.
        assets: Attached assets, in registry order.
    """

    tag: str
    version: str
    title: str
    is_prerelease: bool
    assets: tuple[Asset, ...] = ()

    def find_asset(self, name: str) -> Asset | None:
        """Return the asset with exactly this name, or None."""
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None


@dataclass(frozen=True)
class CacheMetadata:
    """Persisted record of the cached binary.

    Attributes:
        version: Version of the cached binary.
        installed_at: When the binary was installed (UTC).
        last_update_check: When the registry was last polled for updates (UTC).
        source: How the binary got into the cache. Always 'download'.
    """

    version: str
    installed_at: datetime
    last_update_check: datetime
    source: Literal["download"] = "download"

    def with_update_check(self, checked_at: datetime) -> CacheMetadata:
        """Return a copy with last_update_check moved to ``checked_at``."""
        return replace(self, last_update_check=checked_at)


class BinarySource(Enum):
    """Where a resolved binary came from.

    Attributes:
        OVERRIDE: PJ_BINARY_PATH environment variable.
        GLOBAL: First matching executable on PATH.
        CACHE: The package's own download cache.
        NONE: No usable binary.
    """

    OVERRIDE = "override"
    GLOBAL = "global"
    CACHE = "cache"
    NONE = "none"


@dataclass(frozen=True)
class BinaryStatus:
    """Diagnostic snapshot of binary availability.

    Attributes:
        available: True if a usable binary was found.
        path: Path to the binary, or None.
        version: Version reported by the binary, or None.
        source: Which resolution source supplied it.
    """

    available: bool
    path: Path | None
    version: str | None
    source: BinarySource

    @classmethod
    def unavailable(cls) -> BinaryStatus:
        return cls(available=False, path=None, version=None, source=BinarySource.NONE)


@dataclass(frozen=True)
class DownloadProgress:
    """Progress of an asset download.

    Attributes:
        downloaded_bytes: Bytes written so far.
        total_bytes: Declared asset size.
        percent: Rounded percentage, or None when the declared size is zero.
    """

    downloaded_bytes: int
    total_bytes: int
    percent: int | None

    @classmethod
    def from_counts(cls, downloaded_bytes: int, total_bytes: int) -> DownloadProgress:
        percent = round(downloaded_bytes / total_bytes * 100) if total_bytes else None
        return cls(
            downloaded_bytes=downloaded_bytes,
            total_bytes=total_bytes,
            percent=percent,
        )
