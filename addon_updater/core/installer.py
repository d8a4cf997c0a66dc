"""
Archive installation engine.

Unpacks an untrusted add-on zip archive into the shared add-on folder:

* entry names are sanitized so nothing lands outside the destination
* the top-level folders of the archive become the add-on's owned folders
* folders that exist but belong to someone else abort the install
* folders owned by the previous version are removed before extraction

One call runs ``scan -> check -> reap -> extract``. A failed check leaves the
destination untouched; I/O failures while reaping or extracting are raised
as-is and nothing is rolled back.
"""

from __future__ import annotations

import io
import os
import re
import shutil
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterator, List, Sequence, Tuple, Union

from addon_updater.common.errors import (
    ArchiveOpenError,
    CleanupIOError,
    ConflictError,
    ExtractionIOError,
)
from addon_updater.common.logging_config import get_logger

ArchiveSource = Union[zipfile.ZipFile, BinaryIO, bytes]

_SEPARATORS = re.compile(r"[/\\]")
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:$")

_log = get_logger(__name__)


def sanitize_path(name: str) -> PurePosixPath:
    """Turn an archive entry name into a relative path safe to join under a root.

    ``..`` pops the last collected segment. A ``..`` with nothing left to pop
    would climb above the root, so the whole name sanitizes to the empty path.
    Roots, drive prefixes, empty and ``.`` segments are dropped. The result
    may be empty (``PurePosixPath('.')``, whose ``parts`` is ``()``).
    """
    parts: List[str] = []
    for segment in _SEPARATORS.split(name):
        if segment in ("", ".") or _DRIVE_PREFIX.match(segment):
            continue
        if segment == "..":
            if not parts:
                return PurePosixPath()
            parts.pop()
            continue
        parts.append(segment)
    return PurePosixPath(*parts)


def _file_entries(archive: zipfile.ZipFile) -> Iterator[Tuple[zipfile.ZipInfo, PurePosixPath]]:
    """Yield non-directory entries that sanitize to a non-empty path."""
    for info in archive.infolist():
        if info.filename.endswith("/"):
            continue
        path = sanitize_path(info.filename)
        if not path.parts:
            _log.debug("Skipping archive entry %r (empty after sanitizing)", info.filename)
            continue
        yield info, path


def scan_owned_folders(archive: zipfile.ZipFile) -> List[str]:
    """Return the distinct top-level folder names of an archive in first-seen order."""
    folders: List[str] = []
    for _info, path in _file_entries(archive):
        top = path.parts[0]
        if top not in folders:
            folders.append(top)
    return folders


def check_conflicts(destination: Path, folders: Sequence[str], owned_folders: Sequence[str]) -> None:
    """
    Refuse to install over folders that exist but are not owned by this add-on.

    Raises:
        ConflictError: For the first offending folder
    """
    owned = set(owned_folders)
    for folder in folders:
        if os.path.lexists(destination / folder) and folder not in owned:
            raise ConflictError(folder)


def reap_owned_folders(destination: Path, owned_folders: Sequence[str]) -> None:
    """
    Remove every folder or file the previous install owned.

    Raises:
        CleanupIOError: If an owned name is not a plain folder name or a removal fails
    """
    for name in owned_folders:
        if sanitize_path(name).parts != (name,):
            raise CleanupIOError(f"Refusing to remove {name!r}: not a top-level folder name")

    for name in owned_folders:
        target = destination / name
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as exc:
            raise CleanupIOError(f"Could not remove {target}: {exc}") from exc
        _log.debug("Removed previously installed %s", target)


def extract_archive(archive: zipfile.ZipFile, destination: Path) -> None:
    """
    Write every file entry of the archive below ``destination``.

    Raises:
        ExtractionIOError: If creating a directory or file, or copying bytes fails
    """
    for info, path in _file_entries(archive):
        target = destination.joinpath(*path.parts)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as source, open(target, "wb") as sink:
                shutil.copyfileobj(source, sink)
        except (OSError, EOFError, zlib.error, zipfile.BadZipFile, RuntimeError, NotImplementedError) as exc:
            raise ExtractionIOError(f"Could not extract {info.filename!r}: {exc}") from exc


def open_archive(source: ArchiveSource) -> zipfile.ZipFile:
    """Open bytes or a seekable binary stream as a zip archive."""
    if isinstance(source, zipfile.ZipFile):
        return source
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        return zipfile.ZipFile(source)
    except (zipfile.BadZipFile, OSError, ValueError) as exc:
        raise ArchiveOpenError(f"Not a valid zip archive: {exc}") from exc


def install_addon(
    archive: ArchiveSource,
    destination: Union[str, os.PathLike],
    owned_folders: Sequence[str] = (),
) -> List[str]:
    """
    Install an add-on archive into ``destination``.

    Args:
        archive: An open ``ZipFile``, a seekable binary stream or raw bytes
        destination: Existing add-on folder shared by all add-ons
        owned_folders: Folders written by the previous install of this add-on

    Returns:
        The new owned folders, to be persisted by the caller

    Raises:
        ArchiveOpenError: The data is not a zip archive
        ConflictError: A folder of the archive belongs to something else
        CleanupIOError: Removing the previous version failed
        ExtractionIOError: Writing the new version failed
    """
    destination = Path(destination)
    zf = open_archive(archive)
    try:
        folders = scan_owned_folders(zf)
        check_conflicts(destination, folders, owned_folders)
        reap_owned_folders(destination, owned_folders)
        extract_archive(zf, destination)
    finally:
        if zf is not archive:
            zf.close()
    _log.info("Installed %s into %s", ", ".join(folders) or "nothing", destination)
    return folders


__all__ = [
    "sanitize_path",
    "scan_owned_folders",
    "check_conflicts",
    "reap_owned_folders",
    "extract_archive",
    "open_archive",
    "install_addon",
]
