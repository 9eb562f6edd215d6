"""Pillow-backed image codec implementing the application port."""

from __future__ import annotations

import io
from typing import cast

from PIL import Image

from webp_converter.errors import ImageError
from webp_converter.types import ImageArtifact

_DECODE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)
_PNG_MODES = frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"})


class PillowImageCodec:
    """Decode WebP and encode PNG with Pillow."""

    source_format = "WEBP"
    target_format = "PNG"

    def decode(self, data: bytes) -> ImageArtifact:
        """Decode WebP bytes into a fully loaded Pillow image.

        Parameters
        ----------
        data : bytes
            Raw file contents.

        Returns
        -------
        PIL.Image.Image
            Decoded image with pixel data loaded.

        Raises
        ------
        ImageError
            If the payload is empty, truncated, not WebP, or otherwise
            undecodable.
        """
        if not data:
            raise ImageError("Cannot decode image: file is empty.")
        try:
            image = Image.open(io.BytesIO(data), formats=[self.source_format])
            image.load()
        except _DECODE_ERRORS as exc:
            raise ImageError(f"Cannot decode image: {exc}") from exc
        return cast(ImageArtifact, image)

    def encode(self, image: ImageArtifact) -> bytes:
        """Encode a Pillow image into PNG bytes.

        Raises
        ------
        ImageError
            If Pillow rejects the image.
        """
        pil_image = cast(Image.Image, image)
        if pil_image.mode not in _PNG_MODES:
            pil_image = pil_image.convert("RGBA")
        buffer = io.BytesIO()
        try:
            pil_image.save(buffer, format=self.target_format)
        except (OSError, ValueError, KeyError) as exc:
            raise ImageError(f"Cannot encode image as PNG: {exc}") from exc
        return buffer.getvalue()
