"""Binary manager use case: resolve, install and update the pj binary.

Resolution order for resolve_binary_path():
1. PJ_BINARY_PATH override. Must verify, otherwise InvalidOverrideError.
   Nothing else is consulted in either case.
2. First 'pj' on PATH that verifies and is inside the target range.
3. The cached binary, under the same checks. When an update check is due
   and no version was pinned, a refresh is attempted first; its failure
   never fails resolution.
4. A fresh install of the highest compatible release.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from pj.adapters.ports import (
    ExecutableLocatorPort,
    MetadataStorePort,
    OverrideResolverPort,
    PlatformDetectorPort,
    ProgressCallback,
    ReleaseRegistryPort,
    TimeProvider,
)
from pj.domain.binary import BinarySource, BinaryStatus, CacheMetadata, Release
from pj.domain.exceptions import (
    InvalidOverrideError,
    NoCompatibleReleaseError,
    PjError,
)
from pj.domain.settings import BinarySettings
from pj.domain.update_policy import is_update_check_due
from pj.domain.version import is_compatible, select_highest_compatible
from pj.usecases.artifact_installer import ArtifactInstaller
from pj.usecases.binary_verifier import BinaryVerifier, InstallationCheckResult
from pj.usecases.update_result import UpdateAttemptResult

logger = logging.getLogger(__name__)


class BinaryManager:
    """Orchestrates the lifecycle of the pj binary.

    Owns the only mutable state in the package: the path of the last cached
    binary that passed verification. It is set by installs and successful
    cache lookups, and cleared when a re-check of it fails or the cache is
    purged. Nothing outside this class can set it.

    Callers sharing one instance see last-write-wins semantics. There is no
    locking across processes sharing a cache directory.
    """

    def __init__(
        self,
        settings: BinarySettings,
        platform_detector: PlatformDetectorPort,
        registry: ReleaseRegistryPort,
        installer: ArtifactInstaller,
        verifier: BinaryVerifier,
        metadata_store: MetadataStorePort,
        executable_locator: ExecutableLocatorPort,
        override_resolver: OverrideResolverPort,
        time_provider: TimeProvider,
        cached_binary_path: Path,
    ) -> None:
        """Initialize the binary manager.

        Args:
            settings: Target range, binary name and update cadence.
            platform_detector: Port for detecting the host platform.
            registry: Port for querying published releases.
            installer: Installs a release into the binary directory.
            verifier: Checks binaries by running '--version'.
            metadata_store: Port for the cache metadata record.
            executable_locator: Port for searching PATH.
            override_resolver: Port for reading PJ_BINARY_PATH.
            time_provider: Port for the current time.
            cached_binary_path: Location of the resident cached executable.
        """
        self._settings = settings
        self._platform_detector = platform_detector
        self._registry = registry
        self._installer = installer
        self._verifier = verifier
        self._metadata_store = metadata_store
        self._executable_locator = executable_locator
        self._override_resolver = override_resolver
        self._time_provider = time_provider
        self._cached_binary_path = cached_binary_path
        self._resolved_path: Path | None = None

    @property
    def resolved_path(self) -> Path | None:
        """Last cached binary known to be valid, or None."""
        return self._resolved_path

    def resolve_binary_path(
        self,
        force_refresh: bool = False,
        pinned_version: str | None = None,
        on_progress: ProgressCallback = None,
    ) -> Path:
        """Return a path to a usable pj binary, installing one if needed.

        Args:
            force_refresh: Skip the cache and install afresh.
            pinned_version: Install exactly this version if an install is
                needed. Also suppresses the opportunistic update.
            on_progress: Download progress callback for any install.

        Returns:
            Path to a verified pj binary.

        Raises:
            InvalidOverrideError: If PJ_BINARY_PATH is set but does not verify.
            UnsupportedPlatformError: If an install is needed on an
                unsupported host.
            NoCompatibleReleaseError, NoMatchingAssetError, RegistryError,
            DownloadError, ArchiveExtractionError, BinaryVerificationError:
                If an install is needed and fails.
        """
        override = self._override_resolver.resolve_override()
        if override is not None:
            if self._verifier.is_valid(override):
                logger.debug(f"Using PJ_BINARY_PATH override {override}")
                return override
            raise InvalidOverrideError(str(override))

        global_path = self._find_global()
        if global_path is not None:
            logger.debug(f"Using global pj at {global_path}")
            return global_path

        if not force_refresh:
            cached_path = self._find_cached()
            if cached_path is not None:
                if pinned_version is None and self._is_update_check_due():
                    result = self._attempt_update(on_progress)
                    if result.success and result.path is not None:
                        return result.path
                    logger.warning(
                        f"Update check failed, using cached pj at {cached_path}: "
                        f"{result.error}"
                    )
                logger.debug(f"Using cached pj at {cached_path}")
                return cached_path

        return self.install_release(pinned_version=pinned_version, on_progress=on_progress)

    def get_status(self) -> BinaryStatus:
        """Report which binary would be used, without downloading.

        An override that fails verification is reported as not found and
        the remaining sources are inspected, unlike resolve_binary_path.
        Does not change the resolved path.
        """
        override = self._override_resolver.resolve_override()
        if override is not None:
            check = self._verifier.check(override)
            if check.is_ok:
                return BinaryStatus(
                    available=True,
                    path=override,
                    version=check.version,
                    source=BinarySource.OVERRIDE,
                )
            logger.debug(f"PJ_BINARY_PATH override is not usable: {check.error_message}")

        global_path = self._executable_locator.find(self._settings.binary_name)
        if global_path is not None:
            version = self._compatible_version(global_path)
            if version is not None:
                return BinaryStatus(
                    available=True,
                    path=global_path,
                    version=version,
                    source=BinarySource.GLOBAL,
                )

        for candidate in self._cache_candidates():
            version = self._compatible_version(candidate)
            if version is not None:
                return BinaryStatus(
                    available=True,
                    path=candidate,
                    version=version,
                    source=BinarySource.CACHE,
                )

        return BinaryStatus.unavailable()

    def install_release(
        self,
        pinned_version: str | None = None,
        on_progress: ProgressCallback = None,
    ) -> Path:
        """Download and install a release into the cache.

        Args:
            pinned_version: Exact version to install (with or without 'v').
                If None, the highest release inside the target range.
            on_progress: Download progress callback.

        Returns:
            Path to the installed binary.

        Raises:
            UnsupportedPlatformError: If the host has no release assets.
            NoCompatibleReleaseError: If no release is inside the target range.
            NoMatchingAssetError: If the release has no asset for this host.
            RegistryError, DownloadError, ArchiveExtractionError,
            BinaryVerificationError: If a step of the install fails.
        """
        if pinned_version is not None:
            release = self._registry.get_release_by_tag(pinned_version)
        else:
            release = self._select_compatible_release()
        return self._install(release, on_progress)

    def refresh_cached_install(
        self,
        force: bool = False,
        on_progress: ProgressCallback = None,
    ) -> Path:
        """Bring the cached binary up to the newest compatible release.

        If the cache already holds that release and force is False, only the
        last update check time is moved forward and nothing is downloaded.

        Args:
            force: Reinstall even if the cache is current.
            on_progress: Download progress callback.

        Returns:
            Path to the cached binary.

        Raises:
            The same exceptions as install_release.
        """
        release = self._select_compatible_release()
        metadata = self._metadata_store.load()

        if metadata is not None and metadata.version == release.version and not force:
            self._metadata_store.save(
                metadata.with_update_check(self._time_provider.now())
            )
            cached_path = self._find_cached()
            if cached_path is not None:
                logger.debug(f"Cached pj {metadata.version} is current")
                return cached_path

        if metadata is not None and metadata.version != release.version:
            logger.info(f"Updating cached pj {metadata.version} -> {release.version}")
        return self._install(release, on_progress)

    def purge_cache(self) -> None:
        """Remove the cached binary directory and the metadata record.

        Removal failures are logged, not raised. The metadata record is
        deleted and the resolved path cleared either way.
        """
        try:
            shutil.rmtree(self._cached_binary_path.parent)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove {self._cached_binary_path.parent}: {e}")
        finally:
            self._resolved_path = None
        self._metadata_store.delete()
        logger.info("Cleared pj binary cache")

    def check_binary(self, path: Path | None) -> InstallationCheckResult:
        """Run the full verification on a path and return the detailed result."""
        return self._verifier.check(path)

    def check_validity(self, path: Path) -> bool:
        return self._verifier.is_valid(path)

    def read_installed_version(self, path: Path) -> str | None:
        return self._verifier.read_version(path)

    def get_latest_release(self) -> Release:
        """Fetch the registry's latest release (may be a prerelease)."""
        return self._registry.get_latest_release()

    def _install(self, release: Release, on_progress: ProgressCallback) -> Path:
        platform = self._platform_detector.detect()
        path = self._installer.install(release, platform, on_progress)

        now = self._time_provider.now()
        self._metadata_store.save(
            CacheMetadata(version=release.version, installed_at=now, last_update_check=now)
        )
        self._resolved_path = path
        return path

    def _select_compatible_release(self) -> Release:
        target = self._settings.target_version
        releases = self._registry.list_releases()
        best_version = select_highest_compatible(
            (release.version for release in releases), target
        )
        if best_version is None:
            raise NoCompatibleReleaseError(target, [r.version for r in releases])

        return next(release for release in releases if release.version == best_version)

    def _attempt_update(self, on_progress: ProgressCallback) -> UpdateAttemptResult:
        try:
            path = self.refresh_cached_install(on_progress=on_progress)
        except (PjError, OSError) as e:
            return UpdateAttemptResult.create_failure(str(e))
        return UpdateAttemptResult.create_success(path)

    def _is_update_check_due(self) -> bool:
        return is_update_check_due(
            self._metadata_store.load(),
            self._time_provider.now(),
            self._settings.update_check_interval_days,
        )

    def _compatible_version(self, path: Path) -> str | None:
        """Return the binary's version if it verifies and is in range."""
        check = self._verifier.check(path)
        if not check.is_ok or check.version is None:
            logger.debug(f"Rejecting {path}: {check.error_message}")
            return None
        if not is_compatible(check.version, self._settings.target_version):
            logger.debug(
                f"Rejecting {path}: version {check.version} is outside "
                f"{self._settings.target_version}.x"
            )
            return None
        return check.version

    def _find_global(self) -> Path | None:
        path = self._executable_locator.find(self._settings.binary_name)
        if path is None or self._compatible_version(path) is None:
            return None
        return path

    def _cache_candidates(self) -> list[Path]:
        candidates = [self._cached_binary_path]
        if self._resolved_path is not None and self._resolved_path != self._cached_binary_path:
            candidates.insert(0, self._resolved_path)
        return candidates

    def _find_cached(self) -> Path | None:
        if self._resolved_path is not None:
            stale = self._resolved_path
            if self._compatible_version(stale) is not None:
                return stale
            logger.debug(f"Cached pj at {stale} no longer valid")
            self._resolved_path = None
            if stale == self._cached_binary_path:
                return None

        if self._compatible_version(self._cached_binary_path) is not None:
            self._resolved_path = self._cached_binary_path
            return self._cached_binary_path
        return None
