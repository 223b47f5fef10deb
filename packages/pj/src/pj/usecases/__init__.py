"""Use cases: Application logic layer."""

from pj.usecases.artifact_installer import ArtifactInstaller
from pj.usecases.binary_manager import BinaryManager
from pj.usecases.binary_verifier import (
    BinaryVerifier,
    InstallationCheckResult,
    InstallationStatus,
)
from pj.usecases.update_result import UpdateAttemptResult

__all__ = [
    "ArtifactInstaller",
    "BinaryManager",
    "BinaryVerifier",
    "InstallationCheckResult",
    "InstallationStatus",
    "UpdateAttemptResult",
]
