"""Tarball implementation of the ArchiveExtractorPort.

Only the single executable entry is ever written. Archive member paths are
never used to build output paths, so entries such as '../../etc/passwd' or
absolute names cannot escape the destination directory.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
from pathlib import Path, PurePosixPath

from pj.adapters.ports import ArchiveExtractorPort
from pj.domain.exceptions import ArchiveExtractionError

logger = logging.getLogger(__name__)


class TarArchiveExtractor:
    """Adapter that extracts one executable from a .tar.gz release archive.

    The first regular-file member whose base name equals the requested
    executable name is copied to ``destination_dir / executable_name``.
    Directories, links, devices and every other member are skipped.
    """

    def extract_executable(
        self,
        archive_path: Path,
        destination_dir: Path,
        executable_name: str,
    ) -> Path:
        """Extract the executable from an archive.

        Args:
            archive_path: Path to the gzip-compressed tarball.
            destination_dir: Directory to write the executable into.
                Created if missing.
            executable_name: Base name to look for, e.g. 'pj' or 'pj.exe'.

        Returns:
            Path to the extracted executable.

        Raises:
            ArchiveExtractionError: If the archive cannot be read or has no
                matching entry.
        """
        destination = destination_dir / executable_name
        try:
            with tarfile.open(archive_path, "r:gz") as archive:
                member = self._find_member(archive, executable_name)
                if member is None:
                    raise ArchiveExtractionError(
                        f"Archive does not contain {executable_name!r}",
                        archive_path=str(archive_path),
                        executable_name=executable_name,
                    )

                source = archive.extractfile(member)
                if source is None:
                    raise ArchiveExtractionError(
                        f"Archive entry {member.name!r} is not readable",
                        archive_path=str(archive_path),
                        executable_name=executable_name,
                    )

                destination_dir.mkdir(parents=True, exist_ok=True)
                with source, destination.open("wb") as out:
                    shutil.copyfileobj(source, out)
        except (tarfile.TarError, EOFError, OSError) as e:
            destination.unlink(missing_ok=True)
            raise ArchiveExtractionError(
                f"Failed to extract {executable_name!r} from {archive_path}: {e}",
                archive_path=str(archive_path),
                executable_name=executable_name,
            ) from e

        logger.debug(f"Extracted {member.name!r} from {archive_path} to {destination}")
        return destination

    @staticmethod
    def _find_member(
        archive: tarfile.TarFile, executable_name: str
    ) -> tarfile.TarInfo | None:
        for member in archive.getmembers():
            if not member.isfile():
                continue
            if PurePosixPath(member.name).name == executable_name:
                return member
        return None


# Runtime protocol check
assert isinstance(TarArchiveExtractor(), ArchiveExtractorPort)
