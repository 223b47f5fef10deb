"""Fake platform detector for testing.

This module provides a fake implementation of PlatformDetectorPort
that allows tests to control platform detection without relying on
actual OS/architecture detection.
"""

from __future__ import annotations

from pj.domain.binary import Platform, RegistryArch, RegistryOs


class FakePlatformDetector:
    """Fake implementation of PlatformDetectorPort for testing.

    Example:
        >>> fake = FakePlatformDetector.from_tuple("darwin", "arm64")
        >>> fake.detect().label
        'darwin/arm64'
    """

    def __init__(self, platform: Platform | None = None) -> None:
        """Initialize with the platform to return.

        Args:
            platform: Platform to return from detect(). Defaults to
                linux/amd64.
        """
        self._platform = platform or Platform(
            host_os="Linux",
            host_arch="x86_64",
            registry_os="linux",
            registry_arch="amd64",
        )
        self._exception: BaseException | None = None
        self.detect_count = 0

    @classmethod
    def from_tuple(cls, os: RegistryOs, arch: RegistryArch) -> FakePlatformDetector:
        """Create a FakePlatformDetector from registry OS and arch names."""
        return cls(Platform(host_os=os, host_arch=arch, registry_os=os, registry_arch=arch))

    def set_platform(self, platform: Platform) -> None:
        self._platform = platform

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from detect(), or None to clear."""
        self._exception = exception

    def detect(self) -> Platform:
        self.detect_count += 1
        if self._exception is not None:
            raise self._exception
        return self._platform
