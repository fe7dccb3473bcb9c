"""Infrastructure: zip archive extraction.

Rules
-----
* Existing files are overwritten; nothing is deleted or rolled back.
* Every member is checked against the destination before anything is
  written, so a hostile archive cannot escape it (zip-slip).
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from samplefetch.exceptions import ExtractFailedError

logger = logging.getLogger(__name__)


class ZipArchiveExtractor:
    """Concrete :class:`ArchiveExtractor` backed by :mod:`zipfile`."""

    def extract(self, stream: BinaryIO, destination: Path) -> Path:
        """Extract all members of the zip in *stream* into *destination*.

        Returns
        -------
        Path
            The resolved destination directory.

        Raises
        ------
        ExtractFailedError
            If the archive is corrupt, contains a member that would land
            outside *destination*, or the filesystem refuses a write.
        """
        target = Path(destination)
        try:
            with zipfile.ZipFile(stream) as archive:
                root = target.resolve()
                members = archive.infolist()
                for member in members:
                    _check_member(root, member.filename)
                root.mkdir(parents=True, exist_ok=True)
                archive.extractall(root)
        except ExtractFailedError:
            raise
        except zipfile.BadZipFile as exc:
            raise ExtractFailedError(
                f"The downloaded file is not a valid zip archive: {exc}",
            ) from exc
        except OSError as exc:
            raise ExtractFailedError(
                f"Could not write to '{target}': {exc}",
                hint="Check that the folder is writable, or pass --folder.",
            ) from exc
        except Exception as exc:
            raise ExtractFailedError(
                f"Unexpected extraction error: {exc}",
            ) from exc

        logger.debug("Extracted %d entries into %s", len(members), root)
        return root


def _check_member(root: Path, filename: str) -> None:
    """Raise :class:`ExtractFailedError` if *filename* escapes *root*."""
    member_path = PurePosixPath(filename.replace("\\", "/"))
    if member_path.is_absolute() or ".." in member_path.parts:
        raise ExtractFailedError(
            f"Archive entry '{filename}' points outside the destination folder.",
        )
    resolved = (root / member_path).resolve()
    if resolved != root and root not in resolved.parents:
        raise ExtractFailedError(
            f"Archive entry '{filename}' points outside the destination folder.",
        )
