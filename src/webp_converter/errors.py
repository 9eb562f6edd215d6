"""Exception types raised by the batch conversion pipeline."""

from __future__ import annotations

from webp_converter.types import ErrorKind


class ConversionError(Exception):
    """Base error for every failure surfaced by the pipeline.

    Attributes
    ----------
    kind : {"io", "image", "config"}
        Failure category, used for diagnostics only.
    exit_code : int
        Process exit status the CLI reports for this error.
    """

    kind: ErrorKind = "io"
    exit_code: int = 1


class IoError(ConversionError):
    """Filesystem failure: listing, reading, writing, deleting or renaming."""

    kind: ErrorKind = "io"


class ImageError(ConversionError):
    """Image decode or encode failure."""

    kind: ErrorKind = "image"


class ParityError(ImageError):
    """Written PNG does not decode back to the source pixels."""


class ConfigurationError(ConversionError):
    """Invalid run configuration."""

    kind: ErrorKind = "config"
