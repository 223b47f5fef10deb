"""Binary manager settings domain entity."""

from dataclasses import dataclass
from pathlib import Path

from pj.domain.exceptions import PjConfigError
from pj.domain.version import parse_target_range


@dataclass(frozen=True)
class BinarySettings:
    """Configuration for locating, installing and updating the pj binary.

    Value object with zero framework dependencies. All fields have defaults
    matching the published pj releases, so ``BinarySettings()`` is a valid
    production configuration.

    Attributes:
        target_version: Compatible major.minor range (e.g., '1.11').
        github_owner: Owner of the repository publishing releases.
        github_repo: Repository publishing releases.
        api_url: Base URL of the release registry API.
        binary_name: Base name of the executable (without '.exe').
        archive_extension: Extension of release archives, without the dot.
        user_agent: Client identification sent with every registry request.
        http_timeout: Timeout in seconds for registry metadata requests.
        download_timeout: Timeout in seconds for asset downloads.
        version_timeout: Timeout in seconds for the '--version' subprocess.
        update_check_interval_days: Days between opportunistic update checks.
        release_page_size: Maximum number of releases fetched by one listing.
        cache_dir: Cache root override. None means the platform default.
    """

    target_version: str = "1.11"
    github_owner: str = "josephschmitt"
    github_repo: str = "pj"
    api_url: str = "https://api.github.com"
    binary_name: str = "pj"
    archive_extension: str = "tar.gz"
    user_agent: str = "pj-py"
    http_timeout: float = 30.0
    download_timeout: float = 300.0
    version_timeout: float = 5.0
    update_check_interval_days: int = 7
    release_page_size: int = 100
    cache_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate settings."""
        self._validate_target_version()
        self._validate_names()
        self._validate_timeouts()
        self._validate_counts()

    def _validate_target_version(self) -> None:
        """Validate target_version is a strict major.minor string."""
        if parse_target_range(self.target_version) is None:
            raise PjConfigError(
                f"target_version must be 'major.minor' (e.g. '1.11'), "
                f"got: {self.target_version!r}"
            )

    def _validate_names(self) -> None:
        """Validate registry coordinates and file names are non-empty."""
        for field_name in (
            "github_owner",
            "github_repo",
            "api_url",
            "binary_name",
            "archive_extension",
            "user_agent",
        ):
            value = getattr(self, field_name)
            if not value or not value.strip():
                raise PjConfigError(f"{field_name} cannot be empty")

        if "/" in self.binary_name or "\\" in self.binary_name:
            raise PjConfigError(
                f"binary_name must be a bare file name, got: {self.binary_name!r}"
            )

    def _validate_timeouts(self) -> None:
        """Validate all timeouts are positive."""
        for field_name in ("http_timeout", "download_timeout", "version_timeout"):
            value = getattr(self, field_name)
            if value <= 0:
                raise PjConfigError(f"{field_name} must be positive, got: {value}")

    def _validate_counts(self) -> None:
        if self.update_check_interval_days < 0:
            raise PjConfigError(
                f"update_check_interval_days must be non-negative, "
                f"got: {self.update_check_interval_days}"
            )
        if self.release_page_size < 1:
            raise PjConfigError(
                f"release_page_size must be at least 1, got: {self.release_page_size}"
            )

    @property
    def releases_url(self) -> str:
        """Registry URL for this repository's releases collection."""
        base = self.api_url.rstrip("/")
        return f"{base}/repos/{self.github_owner}/{self.github_repo}/releases"
