"""Fake release registry for testing.

Provides a test double for ReleaseRegistryPort backed by an in-memory
list of releases.
"""

from __future__ import annotations

from pj.domain.binary import Release
from pj.domain.exceptions import RegistryError


class FakeReleaseRegistry:
    """Fake implementation of ReleaseRegistryPort for testing.

    list_releases() returns the configured releases minus prereleases,
    mirroring the real adapter. get_release_by_tag() looks releases up by
    tag among all configured releases, prereleases included. Every call is
    recorded as a (method, argument) tuple.
    """

    def __init__(
        self,
        releases: list[Release] | None = None,
        latest: Release | None = None,
    ) -> None:
        """Initialize with the releases to serve.

        Args:
            releases: Releases in registry order (newest first).
            latest: Release returned by get_latest_release(). Defaults to
                the first configured release.
        """
        self._releases = list(releases or [])
        self._latest = latest
        self._exception: BaseException | None = None
        self._calls: list[tuple[str, str | None]] = []

    @property
    def calls(self) -> list[tuple[str, str | None]]:
        return self._calls

    def set_releases(self, releases: list[Release]) -> None:
        self._releases = list(releases)

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from every call, or None to clear."""
        self._exception = exception

    def clear_calls(self) -> None:
        self._calls.clear()

    def list_releases(self) -> list[Release]:
        self._calls.append(("list_releases", None))
        self._raise_if_configured()
        return [release for release in self._releases if not release.is_prerelease]

    def get_latest_release(self) -> Release:
        self._calls.append(("get_latest_release", None))
        self._raise_if_configured()
        latest = self._latest or (self._releases[0] if self._releases else None)
        if latest is None:
            raise RegistryError("Release registry returned HTTP 404 Not Found", status_code=404)
        return latest

    def get_release_by_tag(self, tag: str) -> Release:
        normalized = tag if tag.startswith("v") else f"v{tag}"
        self._calls.append(("get_release_by_tag", normalized))
        self._raise_if_configured()
        for release in self._releases:
            if release.tag == normalized:
                return release
        raise RegistryError("Release registry returned HTTP 404 Not Found", status_code=404)

    def _raise_if_configured(self) -> None:
        if self._exception is not None:
            raise self._exception
