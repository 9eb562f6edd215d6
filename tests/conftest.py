"""Shared pytest configuration, marker assignment and image fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

WebpWriter = Callable[..., Path]


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


def _gradient(size: tuple[int, int], mode: str) -> Image.Image:
    width, height = size
    image = Image.new(mode, size)
    for x in range(width):
        for y in range(height):
            red = (x * 37) % 256
            green = (y * 59) % 256
            blue = (x * y * 11) % 256
            pixel = (red, green, blue, 200) if mode == "RGBA" else (red, green, blue)
            image.putpixel((x, y), pixel)
    return image


@pytest.fixture
def write_webp() -> WebpWriter:
    """Return a helper writing a small lossless WebP image to a path."""

    def _write(path: Path, size: tuple[int, int] = (8, 6), mode: str = "RGB") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        _gradient(size, mode).save(path, format="WEBP", lossless=True)
        return path

    return _write
