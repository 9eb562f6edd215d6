"""Filename validation helpers."""

from __future__ import annotations

import re
from pathlib import PurePath

from webp_converter.types import FileAction

SOURCE_SUFFIX = ".webp"
TARGET_SUFFIX = ".png"

_CANONICAL_NAME = re.compile(r"[a-zA-Z0-9]+\.webp")


def is_canonical(name: str) -> bool:
    """Return whether ``name`` is a canonical source asset filename.

    A canonical name is one or more ASCII letters or digits followed by the
    literal lowercase ``.webp`` extension, with nothing before or after.

    Parameters
    ----------
    name : str
        Bare file name (no directory component).

    Returns
    -------
    bool
        ``True`` for names such as ``abc123.webp``; ``False`` for
        ``abc 123.webp``, ``abc.WEBP`` or ``.webp``.
    """
    return _CANONICAL_NAME.fullmatch(name) is not None


def classify_file(name: str) -> FileAction:
    """Classify a file found inside a subdirectory.

    Parameters
    ----------
    name : str
        Bare file name.

    Returns
    -------
    {"convert", "skip", "extraneous"}
        ``"convert"`` for canonical WebP names, ``"skip"`` for any ``.png``
        file, ``"extraneous"`` for everything else.
    """
    suffix = PurePath(name).suffix
    if is_canonical(name) and suffix == SOURCE_SUFFIX:
        return "convert"
    if suffix == TARGET_SUFFIX:
        return "skip"
    return "extraneous"
