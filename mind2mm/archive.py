"""Unpack and pack the zip container used by dotMind files."""

from __future__ import annotations

import logging
import os
import shutil
import zipfile
import zlib
from pathlib import Path
from typing import Iterable, Tuple, Union

from .errors import ArchiveIOError, PathTraversalError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
PackItem = Union[PathLike, Tuple[str, PathLike]]

# Failures a corrupt, encrypted or unsupported entry can raise while reading
_READ_ERRORS = (OSError, EOFError, zipfile.BadZipFile, zlib.error, RuntimeError, NotImplementedError)


def unpack(archive_path: PathLike, dest_dir: PathLike) -> list[Path]:
    """Extract every entry of a zip archive into `dest_dir`.

    Each entry's target is checked against the destination before anything is
    written for it; an entry such as ``../../etc/passwd`` aborts the whole
    extraction. Files already extracted before the offending entry are left
    in place.

    Args:
        archive_path: Path to the zip file.
        dest_dir: Directory to extract into.

    Returns:
        The paths written (directories and files), in archive order.

    Raises:
        PathTraversalError: If an entry resolves outside `dest_dir`.
        ArchiveIOError: If the archive or an entry can't be read or written.
    """
    dest_dir = Path(dest_dir)
    root = os.path.realpath(dest_dir) + os.sep
    written: list[Path] = []

    try:
        zf = zipfile.ZipFile(archive_path, "r")
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveIOError(f"Cannot open archive {archive_path}: {exc}") from exc

    with zf:
        for info in zf.infolist():
            target = dest_dir / info.filename
            if not os.path.realpath(target).startswith(root):
                raise PathTraversalError(f"{info.filename}: entry escapes {dest_dir}")

            written.append(target)
            try:
                if info.is_dir():
                    os.makedirs(target, exist_ok=True)
                    continue

                os.makedirs(target.parent, exist_ok=True)
                with zf.open(info) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)
            except _READ_ERRORS as exc:
                raise ArchiveIOError(f"Cannot extract {info.filename}: {exc}") from exc

            # Unix permission bits live in the high word of external_attr
            mode = (info.external_attr >> 16) & 0o777
            if mode:
                os.chmod(target, mode)

            logger.debug("Extracted %s (%d bytes)", info.filename, info.file_size)

    return written


def pack(archive_path: PathLike, files: Iterable[PackItem]) -> Path:
    """Create a new zip archive at `archive_path` from a list of files.

    Items are either a path or an ``(entry_name, path)`` pair naming the
    stored entry explicitly. A bare path is stored under its own path string
    after zip normalization: a leading ``/`` or drive is dropped and
    separators become ``/``, so ``/tmp/map.json`` is stored as
    ``tmp/map.json``. Entries are written in order with DEFLATE compression.
    An existing file at `archive_path` is overwritten; guarding against that
    is the caller's job.

    Raises:
        ArchiveIOError: On any stat, read or write failure. The partially
            written archive is left on disk.
    """
    archive_path = Path(archive_path)
    try:
        zf = zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED)
    except OSError as exc:
        raise ArchiveIOError(f"Cannot create archive {archive_path}: {exc}") from exc

    with zf:
        for item in files:
            if isinstance(item, tuple):
                entry_name, source = item
            else:
                entry_name, source = str(item), item

            try:
                info = zipfile.ZipInfo.from_file(source, arcname=entry_name)
                info.compress_type = zipfile.ZIP_DEFLATED
                if info.is_dir():
                    zf.writestr(info, b"")
                    continue
                with open(source, "rb") as src, zf.open(info, "w") as dst:
                    shutil.copyfileobj(src, dst)
            except OSError as exc:
                raise ArchiveIOError(f"Cannot add {source} to {archive_path}: {exc}") from exc

            logger.debug("Packed %s as %s", source, info.filename)

    return archive_path
