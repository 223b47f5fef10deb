"""Unit tests for TarArchiveExtractor adapter."""

from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest

from pj.adapters.ports import ArchiveExtractorPort
from pj.adapters.tar_archive_extractor import TarArchiveExtractor
from pj.domain.exceptions import ArchiveExtractionError


def _make_tarball(path: Path, members: dict[str, bytes], directories: tuple[str, ...] = ()) -> Path:
    with tarfile.open(path, "w:gz") as archive:
        for name in directories:
            info = tarfile.TarInfo(name)
            info.type = tarfile.DIRTYPE
            archive.addfile(info)
        for name, content in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o644
            archive.addfile(info, io.BytesIO(content))
    return path


@pytest.mark.tier(1)
@pytest.mark.tra("Adapter.TarArchiveExtractor")
class TestTarArchiveExtractor:
    """Test TarArchiveExtractor.extract_executable()."""

    def test_protocol_is_runtime_checkable(self):
        assert isinstance(TarArchiveExtractor(), ArchiveExtractorPort)

    def test_extracts_top_level_executable(self, tmp_path: Path):
        archive = _make_tarball(
            tmp_path / "pj.tar.gz",
            {"README.md": b"readme", "pj": b"#!/bin/sh\necho pj\n"},
        )

        result = TarArchiveExtractor().extract_executable(archive, tmp_path / "out", "pj")

        assert result == tmp_path / "out" / "pj"
        assert result.read_bytes() == b"#!/bin/sh\necho pj\n"
        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["pj"]

    def test_flattens_nested_entry(self, tmp_path: Path):
        archive = _make_tarball(
            tmp_path / "pj.tar.gz",
            {"pj_1.11.2_linux_amd64/pj": b"nested"},
            directories=("pj_1.11.2_linux_amd64",),
        )

        result = TarArchiveExtractor().extract_executable(archive, tmp_path / "out", "pj")

        assert result == tmp_path / "out" / "pj"
        assert result.read_bytes() == b"nested"

    def test_traversal_entry_cannot_escape_destination(self, tmp_path: Path):
        archive = _make_tarball(tmp_path / "pj.tar.gz", {"../../evil/pj": b"payload"})
        destination = tmp_path / "deep" / "out"

        result = TarArchiveExtractor().extract_executable(archive, destination, "pj")

        assert result == destination / "pj"
        assert not (tmp_path / "evil").exists()

    def test_directory_named_like_executable_is_skipped(self, tmp_path: Path):
        archive = _make_tarball(
            tmp_path / "pj.tar.gz",
            {"bin/pj": b"real"},
            directories=("pj",),
        )

        result = TarArchiveExtractor().extract_executable(archive, tmp_path / "out", "pj")

        assert result.read_bytes() == b"real"

    def test_windows_executable_name(self, tmp_path: Path):
        archive = _make_tarball(tmp_path / "pj.tar.gz", {"pj": b"unix", "pj.exe": b"windows"})

        result = TarArchiveExtractor().extract_executable(archive, tmp_path / "out", "pj.exe")

        assert result.name == "pj.exe"
        assert result.read_bytes() == b"windows"

    def test_missing_entry_raises(self, tmp_path: Path):
        archive = _make_tarball(tmp_path / "pj.tar.gz", {"LICENSE": b"mit"})

        with pytest.raises(ArchiveExtractionError, match="does not contain 'pj'") as exc_info:
            TarArchiveExtractor().extract_executable(archive, tmp_path / "out", "pj")

        assert exc_info.value.executable_name == "pj"
        assert exc_info.value.archive_path == str(archive)
        assert not (tmp_path / "out" / "pj").exists()

    def test_corrupt_archive_raises(self, tmp_path: Path):
        archive = tmp_path / "pj.tar.gz"
        archive.write_bytes(b"this is not gzip")

        with pytest.raises(ArchiveExtractionError, match="Failed to extract"):
            TarArchiveExtractor().extract_executable(archive, tmp_path / "out", "pj")

    def test_missing_archive_raises(self, tmp_path: Path):
        with pytest.raises(ArchiveExtractionError):
            TarArchiveExtractor().extract_executable(tmp_path / "absent.tar.gz", tmp_path, "pj")
