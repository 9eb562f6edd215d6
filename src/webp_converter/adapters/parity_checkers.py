"""Parity checker adapters implementing application ports."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from webp_converter.application.options import ParityOptions
from webp_converter.errors import ImageError
from webp_converter.parity import check_pixel_parity, image_to_array
from webp_converter.types import ImageArtifact


class PngParityChecker:
    """Re-decode a written PNG and compare it with the source pixels."""

    def check(
        self,
        image: ImageArtifact,
        target_path: Path,
        parity: ParityOptions,
    ) -> None:
        """Compare ``image`` with the PNG at ``target_path``.

        Parameters
        ----------
        image : ImageArtifact
            Decoded source image.
        target_path : Path
            Written PNG file.
        parity : ParityOptions
            Parity toggle and per-channel tolerance.

        Raises
        ------
        ParityError
            If shapes or pixel values differ beyond tolerance.
        ImageError
            If the written PNG cannot be decoded.
        """
        if not parity.enabled:
            return
        try:
            with Image.open(target_path, formats=["PNG"]) as written:
                actual = image_to_array(written)
        except OSError as exc:
            raise ImageError(f"Cannot decode written PNG {target_path}: {exc}") from exc
        check_pixel_parity(
            image_to_array(image), actual, atol=parity.atol, label=target_path.name
        )
