"""Platform detector adapter for detecting current OS and architecture.

This module provides an adapter that implements PlatformDetectorPort
by using Python's standard library platform module, plus module-level
helpers for callers that do not need a port.
"""

from __future__ import annotations

import platform

from pj.adapters.ports import PlatformDetectorPort
from pj.domain.binary import Platform, RegistryArch, RegistryOs
from pj.domain.exceptions import UnsupportedPlatformError


class OsPlatformDetector:
    """Adapter that detects the current platform using platform module.

    Implements PlatformDetectorPort by querying platform.system() and
    platform.machine(), keeping the raw values as host identity and mapping
    them onto the release asset naming scheme.

    Supported platforms:
        - OS: linux, darwin, windows
        - Architecture: amd64, arm64

    Machine type mappings:
        - x86_64, AMD64 -> amd64
        - aarch64, arm64, ARM64 -> arm64
    """

    # Mapping from platform.system() values to release asset OS names
    _OS_MAP: dict[str, RegistryOs] = {
        "linux": "linux",
        "darwin": "darwin",
        "windows": "windows",
    }

    # Mapping from platform.machine() values to release asset arch names
    _ARCH_MAP: dict[str, RegistryArch] = {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
    }

    def detect(self) -> Platform:
        """Detect the current platform.

        Returns:
            Platform value object with host and registry identifiers.

        Raises:
            UnsupportedPlatformError: If the current OS or architecture is
                not supported.
        """
        system = platform.system()
        machine = platform.machine()

        registry_os = self._OS_MAP.get(system.lower())
        if registry_os is None:
            raise UnsupportedPlatformError(
                f"Unsupported operating system: {system!r}. "
                f"Supported: linux, darwin, windows",
                os_name=system,
                arch=machine,
            )

        registry_arch = self._ARCH_MAP.get(machine.lower())
        if registry_arch is None:
            raise UnsupportedPlatformError(
                f"Unsupported architecture: {machine!r}. "
                f"Supported: x86_64/amd64, aarch64/arm64",
                os_name=system,
                arch=machine,
            )

        return Platform(
            host_os=system,
            host_arch=machine,
            registry_os=registry_os,
            registry_arch=registry_arch,
        )


def resolve_host_platform() -> Platform:
    """Detect the running host's platform.

    Raises:
        UnsupportedPlatformError: If the host has no release asset mapping.
    """
    return OsPlatformDetector().detect()


def is_host_supported() -> bool:
    """Return True if release assets exist for the running host."""
    try:
        resolve_host_platform()
    except UnsupportedPlatformError:
        return False
    return True


# Runtime protocol check
assert isinstance(OsPlatformDetector(), PlatformDetectorPort)
