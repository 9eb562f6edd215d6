"""Top-level API for batch WebP-to-PNG conversion."""

from __future__ import annotations

from pathlib import Path

from webp_converter.application.results import RunResult
from webp_converter.validate import is_canonical

__version__ = "0.1.0"


def convert_webp_to_png(
    source_path: Path,
    verify: bool = False,
    parity_atol: int = 0,
) -> Path:
    """Convert a single WebP file to PNG next to it.

    Parameters
    ----------
    source_path : Path
        Canonical ``.webp`` file.
    verify : bool, default=False
        Re-decode the written PNG and compare pixels with the source.
    parity_atol : int, default=0
        Allowed per-channel difference when ``verify`` is set.

    Returns
    -------
    Path
        Path of the written PNG. The WebP file is removed.
    """
    from .api import convert_webp_file_to_png as _impl

    return _impl(source_path=source_path, verify=verify, parity_atol=parity_atol)


def convert_directory_tree(
    base_path: Path,
    first_removal: str = "",
    second_removal: str = "",
    verify: bool = False,
    parity_atol: int = 0,
    max_workers: int | None = None,
) -> RunResult:
    """Convert every direct subdirectory of ``base_path``, then sweep it.

    Parameters
    ----------
    base_path : Path
        Directory whose subdirectories are processed.
    first_removal : str, default=""
        Substring removed from each processed directory name.
    second_removal : str, default=""
        Second substring removed after ``first_removal``.
    verify : bool, default=False
        Enable pixel parity checks after each conversion.
    parity_atol : int, default=0
        Allowed per-channel difference when ``verify`` is set.
    max_workers : int | None, default=None
        Pool size; defaults to ``os.cpu_count()``.

    Returns
    -------
    RunResult
        Per-directory results, swept files and elapsed time.
    """
    from .api import convert_directory_tree as _impl

    return _impl(
        base_path=base_path,
        first_removal=first_removal,
        second_removal=second_removal,
        verify=verify,
        parity_atol=parity_atol,
        max_workers=max_workers,
    )


__all__ = [
    "convert_webp_to_png",
    "convert_directory_tree",
    "is_canonical",
]
