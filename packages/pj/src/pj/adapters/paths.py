"""Cache directory layout for the pj binary.

Layout under the cache root:
    bin/pj           the resident executable (pj.exe on Windows)
    metadata.json    the cache metadata record
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pj.domain.settings import BinarySettings

CACHE_DIR_NAME = "pj-py"
BIN_DIR_NAME = "bin"
METADATA_FILE_NAME = "metadata.json"


def get_cache_root(settings: BinarySettings | None = None) -> Path:
    """Get the cache root directory.

    Returns platform-specific cache directory:
    - Any OS with XDG_CACHE_HOME set: $XDG_CACHE_HOME/pj-py
    - Windows: %LOCALAPPDATA%\\pj-py\\cache (or ~\\AppData\\Local\\pj-py\\cache)
    - Otherwise: ~/.cache/pj-py

    Args:
        settings: Settings whose cache_dir, when set, wins over the defaults.

    Returns:
        Path to the cache root. The directory is not created.
    """
    if settings is not None and settings.cache_dir is not None:
        return Path(settings.cache_dir)

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / CACHE_DIR_NAME

    if sys.platform == "win32":
        local_app_data = os.environ.get("LOCALAPPDATA")
        base = (
            Path(local_app_data)
            if local_app_data
            else Path.home() / "AppData" / "Local"
        )
        return base / CACHE_DIR_NAME / "cache"

    return Path.home() / ".cache" / CACHE_DIR_NAME


def get_binary_dir(settings: BinarySettings | None = None) -> Path:
    return get_cache_root(settings) / BIN_DIR_NAME


def executable_name(binary_name: str, windows: bool) -> str:
    """File name of the executable on the given OS family."""
    return f"{binary_name}.exe" if windows else binary_name


def get_binary_path(settings: BinarySettings | None = None) -> Path:
    """Path of the cached executable for the running host."""
    binary_name = settings.binary_name if settings is not None else "pj"
    return get_binary_dir(settings) / executable_name(
        binary_name, windows=sys.platform == "win32"
    )


def get_metadata_path(settings: BinarySettings | None = None) -> Path:
    return get_cache_root(settings) / METADATA_FILE_NAME
