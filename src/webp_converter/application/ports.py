"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from webp_converter.application.options import ParityOptions
from webp_converter.types import ImageArtifact


class ImageCodec(Protocol):
    """Decode source-format bytes and encode target-format bytes."""

    def decode(self, data: bytes) -> ImageArtifact:
        """Decode bytes into an in-memory image."""

    def encode(self, image: ImageArtifact) -> bytes:
        """Encode an in-memory image into target-format bytes."""


class ParityChecker(Protocol):
    """Check pixel parity between the decoded source and the written target."""

    def check(
        self,
        image: ImageArtifact,
        target_path: Path,
        parity: ParityOptions,
    ) -> None:
        """Raise on mismatch."""
