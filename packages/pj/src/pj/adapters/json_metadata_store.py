"""JSON file implementation of the MetadataStorePort.

The record is stored as a small JSON object:

    {
      "version": "1.11.0",
      "installedAt": "2026-01-01T00:00:00+00:00",
      "lastUpdateCheck": "2026-01-01T00:00:00+00:00",
      "source": "download"
    }
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pj.adapters.ports import MetadataStorePort
from pj.domain.binary import CacheMetadata

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got: {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class JsonMetadataStore:
    """Adapter that persists CacheMetadata as a JSON file.

    A missing file means "never installed". A file that exists but cannot
    be decoded is logged and treated the same way, so a corrupted record
    triggers a reinstall instead of an error.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so readers never see a partial record.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the metadata file. Parent directories are
                created on first save.
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> CacheMetadata | None:
        """Read the metadata record.

        Returns:
            CacheMetadata, or None if the file is absent or unreadable.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read cache metadata at {self._path}: {e}")
            return None

        try:
            data = json.loads(raw)
            version = data["version"]
            if not isinstance(version, str) or not version:
                raise ValueError(f"version must be a non-empty string, got: {version!r}")
            return CacheMetadata(
                version=version,
                installed_at=_parse_timestamp(data["installedAt"]),
                last_update_check=_parse_timestamp(data["lastUpdateCheck"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring malformed cache metadata at {self._path}: {e}")
            return None

    def save(self, metadata: CacheMetadata) -> None:
        """Replace the metadata record.

        Args:
            metadata: Record to persist.

        Raises:
            OSError: If the file cannot be written.
        """
        payload = {
            "version": metadata.version,
            "installedAt": metadata.installed_at.isoformat(),
            "lastUpdateCheck": metadata.last_update_check.isoformat(),
            "source": metadata.source,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(payload, tmp, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self) -> None:
        """Remove the metadata record if present."""
        self._path.unlink(missing_ok=True)


# Runtime protocol check
assert isinstance(JsonMetadataStore(Path("metadata.json")), MetadataStorePort)
