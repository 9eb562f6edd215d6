"""Filesystem adapter: scanning, deleting, atomic writes and renames."""

from __future__ import annotations

import errno
import logging
import os
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path

from webp_converter.errors import IoError

logger = logging.getLogger(__name__)

_RENAME_LOCK = threading.Lock()

# mkstemp always creates 0o600; converted files get the regular umask mode.
_UMASK = os.umask(0)
os.umask(_UMASK)
_FILE_MODE = 0o666 & ~_UMASK


def delete_file(path: Path) -> None:
    """Delete a single regular file.

    Parameters
    ----------
    path : Path
        File to remove.

    Raises
    ------
    IoError
        If the path is missing, is a directory, or cannot be removed.
    """
    try:
        path.unlink()
    except OSError as exc:
        raise IoError(f"Failed to delete {path}: {exc}") from exc
    logger.info("Deleted %s", path)


def list_directories(base_path: Path) -> list[str]:
    """Return names of the direct subdirectories of ``base_path``, sorted."""
    try:
        with os.scandir(base_path) as entries:
            return sorted(entry.name for entry in entries if entry.is_dir())
    except OSError as exc:
        raise IoError(f"Failed to list directories in {base_path}: {exc}") from exc


def list_files(directory: Path) -> list[Path]:
    """Return the direct file entries of ``directory`` as a sorted snapshot."""
    try:
        with os.scandir(directory) as entries:
            names = sorted(entry.name for entry in entries if entry.is_file())
    except OSError as exc:
        raise IoError(f"Failed to list files in {directory}: {exc}") from exc
    return [directory / name for name in names]


def read_bytes(path: Path) -> bytes:
    """Read a whole file into memory."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise IoError(f"Failed to read {path}: {exc}") from exc


def write_bytes_atomic(
    path: Path,
    data: bytes,
    *,
    check: Callable[[Path], None] | None = None,
) -> None:
    """Write ``data`` to ``path`` so that readers never see a partial file.

    The payload goes to a hidden temporary file in the same directory which
    is then moved onto ``path`` with :func:`os.replace`. The file gets the
    usual ``0o666 & ~umask`` permissions. When ``check`` is given it runs on
    the temporary file before the move; if it raises, the temporary file is
    removed, ``path`` is left untouched and the exception propagates as is.

    Raises
    ------
    IoError
        If the temporary file cannot be written or moved into place.
    """
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.chmod(tmp_name, _FILE_MODE)
        if check is not None:
            check(Path(tmp_name))
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise IoError(f"Failed to write {path}: {exc}") from exc
    except BaseException:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise


def rename_directory(base_path: Path, old_name: str, new_name: str) -> Path:
    """Rename ``base_path / old_name`` to ``base_path / new_name``.

    An existing entry under the new name is never overwritten. The existence
    check and the rename run under one process-wide lock, so sibling
    directories renamed concurrently onto the same name cannot both succeed.

    Returns
    -------
    Path
        The renamed directory path.

    Raises
    ------
    IoError
        If the target already exists or the rename fails.
    """
    source = base_path / old_name
    target = base_path / new_name
    with _RENAME_LOCK:
        if os.path.lexists(target):
            exc = FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(target))
            raise IoError(f"Failed to rename {source} to {target}: {exc}") from exc
        try:
            source.rename(target)
        except OSError as exc:
            raise IoError(f"Failed to rename {source} to {target}: {exc}") from exc
    logger.info("Renamed %s to %s", source, target)
    return target
