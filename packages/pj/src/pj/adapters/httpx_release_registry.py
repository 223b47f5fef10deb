"""HTTPX-based implementation of the ReleaseRegistryPort.

This adapter queries the GitHub releases API for published pj releases.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pj.adapters.ports import ReleaseRegistryPort
from pj.domain.binary import Asset, Release
from pj.domain.exceptions import RegistryError
from pj.domain.settings import BinarySettings

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.github.v3+json"


def _strip_v(tag: str) -> str:
    return tag[1:] if tag.startswith("v") else tag


def _parse_asset(data: Any) -> Asset:
    return Asset(
        name=str(data["name"]),
        download_url=str(data["browser_download_url"]),
        size_bytes=int(data.get("size") or 0),
        content_type=str(data.get("content_type") or "application/octet-stream"),
    )


def _parse_release(data: Any) -> Release:
    """Map one GitHub release object onto a Release.

    Raises:
        KeyError, TypeError, ValueError: If required fields are missing or
            have the wrong shape.
    """
    if not isinstance(data, dict):
        raise TypeError(f"release must be an object, got: {type(data).__name__}")

    tag = data["tag_name"]
    if not isinstance(tag, str) or not tag:
        raise ValueError(f"tag_name must be a non-empty string, got: {tag!r}")

    assets = data.get("assets") or []
    if not isinstance(assets, list):
        raise TypeError("assets must be a list")

    return Release(
        tag=tag,
        version=_strip_v(tag),
        title=str(data.get("name") or tag),
        is_prerelease=bool(data.get("prerelease", False)),
        assets=tuple(_parse_asset(asset) for asset in assets),
    )


class HttpxReleaseRegistry:
    """HTTPX-based adapter for the GitHub releases API.

    Every request sends the GitHub v3 Accept header and the configured
    User-Agent, and is bounded by settings.http_timeout. Transport errors,
    non-2xx responses and payloads that do not look like releases are all
    raised as RegistryError.

    This adapter implements ReleaseRegistryPort for use by BinaryManager.
    """

    def __init__(
        self,
        settings: BinarySettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the registry client.

        Args:
            settings: Registry coordinates, user agent and timeout.
            client: Optional httpx.Client for dependency injection (testing).
                   If not provided, a new client is created per request.
        """
        self._settings = settings or BinarySettings()
        self._client = client

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Accept": ACCEPT_HEADER,
            "User-Agent": self._settings.user_agent,
        }

    def list_releases(self) -> list[Release]:
        """List published non-prerelease releases, newest first.

        Returns:
            Releases in registry order, limited to release_page_size
            entries before prereleases are dropped.

        Raises:
            RegistryError: On any failure.
        """
        url = self._settings.releases_url
        data = self._get_json(url, params={"per_page": self._settings.release_page_size})
        if not isinstance(data, list):
            raise RegistryError(
                "Unexpected response from release registry: expected a list",
                url=url,
            )

        try:
            releases = [_parse_release(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise RegistryError(
                f"Malformed release in registry response: {e}",
                url=url,
                original_error=e,
            ) from e

        stable = [release for release in releases if not release.is_prerelease]
        logger.debug(
            f"Registry listed {len(releases)} releases, {len(stable)} non-prerelease"
        )
        return stable

    def get_latest_release(self) -> Release:
        """Fetch the registry's most recent release.

        Raises:
            RegistryError: On any failure.
        """
        return self._get_release(f"{self._settings.releases_url}/latest")

    def get_release_by_tag(self, tag: str) -> Release:
        """Fetch a release by tag, adding a leading 'v' if missing.

        Raises:
            RegistryError: On any failure.
        """
        normalized = tag if tag.startswith("v") else f"v{tag}"
        return self._get_release(f"{self._settings.releases_url}/tags/{normalized}")

    def _get_release(self, url: str) -> Release:
        data = self._get_json(url)
        try:
            return _parse_release(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RegistryError(
                f"Malformed release in registry response: {e}",
                url=url,
                original_error=e,
            ) from e

    def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a URL and decode the JSON body.

        Raises:
            RegistryError: On transport failure, malformed URL, non-2xx status
                or invalid JSON.
        """
        try:
            if self._client is not None:
                response = self._client.get(
                    url,
                    params=params,
                    headers=self._headers,
                    timeout=self._settings.http_timeout,
                )
            else:
                with httpx.Client() as client:
                    response = client.get(
                        url,
                        params=params,
                        headers=self._headers,
                        timeout=self._settings.http_timeout,
                    )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RegistryError(
                f"Failed to reach release registry: {e}",
                url=url,
                original_error=e,
            ) from e

        if not response.is_success:
            raise RegistryError(
                f"Release registry returned HTTP {response.status_code} "
                f"{response.reason_phrase}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RegistryError(
                f"Release registry returned invalid JSON: {e}",
                url=url,
                status_code=response.status_code,
                original_error=e,
            ) from e


# Runtime protocol check
assert isinstance(HttpxReleaseRegistry(), ReleaseRegistryPort)
