"""Pixel parity checks between a decoded source image and its PNG output."""

from __future__ import annotations

from typing import cast

import numpy as np
import numpy.typing as npt
from PIL import Image

from webp_converter.errors import ParityError
from webp_converter.types import ImageArtifact

PixelArray = npt.NDArray[np.int16]


def image_to_array(image: ImageArtifact) -> PixelArray:
    """Return RGBA pixel data as a signed array safe for subtraction."""
    rgba = cast(Image.Image, image).convert("RGBA")
    return np.asarray(rgba, dtype=np.int16)


def check_pixel_parity(
    expected: PixelArray,
    actual: PixelArray,
    atol: int,
    label: str,
) -> None:
    """Check that two pixel arrays match within ``atol`` per channel."""
    if expected.shape != actual.shape:
        raise ParityError(
            f"{label} parity failed: shape mismatch "
            f"(expected {expected.shape}, got {actual.shape})."
        )
    if expected.size == 0:
        return
    max_abs = int(np.max(np.abs(expected - actual)))
    if max_abs > atol:
        raise ParityError(
            f"{label} parity failed: pixels differ "
            f"(max_abs_diff={max_abs}, atol={atol})."
        )
