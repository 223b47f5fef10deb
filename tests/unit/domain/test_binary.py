"""Unit tests for binary-related domain value objects."""

from datetime import datetime, timedelta, timezone

import pytest

from pj.domain.binary import (
    Asset,
    BinarySource,
    BinaryStatus,
    CacheMetadata,
    DownloadProgress,
    Platform,
    Release,
    expected_asset_name,
)
from pj.domain.exceptions import UnsupportedPlatformError


def _platform(os: str = "linux", arch: str = "amd64") -> Platform:
    return Platform(host_os=os, host_arch=arch, registry_os=os, registry_arch=arch)  # type: ignore[arg-type]


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.Platform")
class TestPlatform:
    """Test Platform value object."""

    @pytest.mark.parametrize("os", ["linux", "darwin", "windows"])
    @pytest.mark.parametrize("arch", ["amd64", "arm64"])
    def test_accepts_supported_combinations(self, os, arch):
        platform = _platform(os, arch)
        assert platform.label == f"{os}/{arch}"

    def test_keeps_host_identity(self):
        platform = Platform(host_os="Linux", host_arch="x86_64", registry_os="linux", registry_arch="amd64")
        assert platform.host_os == "Linux"
        assert platform.host_arch == "x86_64"

    def test_is_windows(self):
        assert _platform("windows").is_windows is True
        assert _platform("linux").is_windows is False

    def test_reject_invalid_os(self):
        with pytest.raises(UnsupportedPlatformError, match="registry_os must be one of"):
            _platform("freebsd")

    def test_reject_invalid_arch(self):
        with pytest.raises(UnsupportedPlatformError, match="registry_arch must be one of"):
            _platform("linux", "x86")

    def test_frozen_dataclass(self):
        platform = _platform()
        with pytest.raises(AttributeError):
            platform.registry_os = "darwin"  # type: ignore


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.AssetName")
class TestExpectedAssetName:
    """Test expected_asset_name()."""

    def test_darwin_arm64(self):
        assert expected_asset_name("1.4.1", _platform("darwin", "arm64")) == "pj_1.4.1_darwin_arm64.tar.gz"

    def test_strips_leading_v(self):
        platform = _platform("darwin", "arm64")
        assert expected_asset_name("v1.4.1", platform) == expected_asset_name("1.4.1", platform)

    def test_custom_binary_name_and_extension(self):
        name = expected_asset_name("2.0.0", _platform("windows", "amd64"), binary_name="tool", archive_extension="zip")
        assert name == "tool_2.0.0_windows_amd64.zip"


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.Release")
class TestRelease:
    """Test Release and Asset value objects."""

    def test_find_asset_by_exact_name(self):
        wanted = Asset(name="pj_1.11.0_linux_amd64.tar.gz", download_url="https://x/a", size_bytes=10)
        other = Asset(name="pj_1.11.0_linux_arm64.tar.gz", download_url="https://x/b", size_bytes=10)
        release = Release(tag="v1.11.0", version="1.11.0", title="v1.11.0", is_prerelease=False, assets=(other, wanted))

        assert release.find_asset("pj_1.11.0_linux_amd64.tar.gz") is wanted
        assert release.find_asset("pj_1.11.0_linux_amd64") is None

    def test_asset_rejects_negative_size(self):
        with pytest.raises(ValueError, match="size_bytes must be non-negative"):
            Asset(name="a", download_url="https://x/a", size_bytes=-1)


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.CacheMetadata")
class TestCacheMetadata:
    """Test CacheMetadata value object."""

    def test_source_is_download(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert CacheMetadata(version="1.11.0", installed_at=now, last_update_check=now).source == "download"

    def test_with_update_check_only_moves_check_time(self):
        installed = datetime(2026, 1, 1, tzinfo=timezone.utc)
        metadata = CacheMetadata(version="1.11.0", installed_at=installed, last_update_check=installed)
        later = installed + timedelta(days=8)

        updated = metadata.with_update_check(later)

        assert updated.last_update_check == later
        assert updated.installed_at == installed
        assert updated.version == "1.11.0"
        assert metadata.last_update_check == installed


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.BinaryStatus")
class TestBinaryStatus:
    """Test BinaryStatus and BinarySource."""

    def test_unavailable(self):
        status = BinaryStatus.unavailable()
        assert status.available is False
        assert status.path is None
        assert status.version is None
        assert status.source is BinarySource.NONE

    def test_source_values(self):
        assert [s.value for s in BinarySource] == ["override", "global", "cache", "none"]


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.DownloadProgress")
class TestDownloadProgress:
    """Test DownloadProgress.from_counts()."""

    def test_percent_from_declared_size(self):
        progress = DownloadProgress.from_counts(512, 1024)
        assert progress == DownloadProgress(downloaded_bytes=512, total_bytes=1024, percent=50)

    def test_percent_is_rounded(self):
        assert DownloadProgress.from_counts(1, 3).percent == 33
        assert DownloadProgress.from_counts(2, 3).percent == 67

    def test_percent_is_none_for_zero_size(self):
        assert DownloadProgress.from_counts(100, 0).percent is None
