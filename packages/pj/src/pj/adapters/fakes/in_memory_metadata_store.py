"""In-memory metadata store for testing."""

from __future__ import annotations

from pj.domain.binary import CacheMetadata


class InMemoryMetadataStore:
    """Fake implementation of MetadataStorePort for testing.

    Holds at most one record. Every saved record is also appended to
    ``saved`` so tests can assert on the write history.
    """

    def __init__(self, metadata: CacheMetadata | None = None) -> None:
        self._metadata = metadata
        self.saved: list[CacheMetadata] = []
        self.delete_count = 0

    @property
    def metadata(self) -> CacheMetadata | None:
        return self._metadata

    def load(self) -> CacheMetadata | None:
        return self._metadata

    def save(self, metadata: CacheMetadata) -> None:
        self._metadata = metadata
        self.saved.append(metadata)

    def delete(self) -> None:
        self._metadata = None
        self.delete_count += 1
