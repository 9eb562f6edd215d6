"""Shared type aliases and protocols for conversion modules."""

from __future__ import annotations

from typing import Literal, Protocol

type ErrorKind = Literal["io", "image", "config"]
type FileAction = Literal["convert", "skip", "extraneous"]


class ImageArtifact(Protocol):
    """Marker protocol for decoded in-memory images."""
