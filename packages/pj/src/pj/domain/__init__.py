"""Domain layer: Entities with zero external dependencies."""

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
from pj.domain.exceptions import (
    ArchiveExtractionError,
    BinaryVerificationError,
    DownloadError,
    ExecutionError,
    InvalidOverrideError,
    NoCompatibleReleaseError,
    NoMatchingAssetError,
    PjBinaryError,
    PjConfigError,
    PjError,
    RegistryError,
    UnsupportedPlatformError,
)
from pj.domain.settings import BinarySettings
from pj.domain.update_policy import is_update_check_due
from pj.domain.version import (
    ParsedVersion,
    TargetRange,
    compare_versions,
    is_compatible,
    parse_target_range,
    parse_version,
    select_highest_compatible,
)

__all__ = [
    "Asset",
    "BinarySource",
    "BinaryStatus",
    "CacheMetadata",
    "DownloadProgress",
    "Platform",
    "Release",
    "expected_asset_name",
    "ArchiveExtractionError",
    "BinaryVerificationError",
    "DownloadError",
    "ExecutionError",
    "InvalidOverrideError",
    "NoCompatibleReleaseError",
    "NoMatchingAssetError",
    "PjBinaryError",
    "PjConfigError",
    "PjError",
    "RegistryError",
    "UnsupportedPlatformError",
    "BinarySettings",
    "is_update_check_due",
    "ParsedVersion",
    "TargetRange",
    "compare_versions",
    "is_compatible",
    "parse_target_range",
    "parse_version",
    "select_highest_compatible",
]
