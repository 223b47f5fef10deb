"""pj-py: Lifecycle management for the pj project finder binary."""

__version__ = "0.1.0"

from pj.domain.binary import BinarySource, BinaryStatus, DownloadProgress
from pj.domain.exceptions import (
    ExecutionError,
    PjBinaryError,
    PjConfigError,
    PjError,
)
from pj.domain.settings import BinarySettings
from pj.factories import create_binary_manager, get_binary_manager, reset_binary_manager
from pj.usecases.binary_manager import BinaryManager

__all__ = [
    "BinarySource",
    "BinaryStatus",
    "DownloadProgress",
    "ExecutionError",
    "PjBinaryError",
    "PjConfigError",
    "PjError",
    "BinarySettings",
    "create_binary_manager",
    "get_binary_manager",
    "reset_binary_manager",
    "BinaryManager",
]
