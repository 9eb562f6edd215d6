#!/usr/bin/env python3
"""Build a sample directory tree and convert it end to end."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import numpy as np
from PIL import Image

from webp_converter import convert_directory_tree


def _write_sample(path: Path, seed: int) -> None:
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(32, 48, 3), dtype=np.uint8)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(pixels).save(path, format="WEBP", lossless=True)


def _print_tree(base: Path) -> None:
    for path in sorted(base.rglob("*")):
        print(f"  {path.relative_to(base)}")


def main() -> None:
    """Create Set01/Set02 with a few strays, convert, and print the result."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    with tempfile.TemporaryDirectory(prefix="webp-example-") as tmp:
        base = Path(tmp)
        _write_sample(base / "[raw] Set01" / "a1.webp", seed=1)
        _write_sample(base / "[raw] Set01" / "a2.webp", seed=2)
        (base / "[raw] Set01" / "junk!!.webp").write_bytes(b"junk")
        _write_sample(base / "[raw] Set02" / "b1.webp", seed=3)
        (base / "[raw] Set02" / "cover.png").write_bytes(b"kept as-is")
        (base / "notes.txt").write_text("stray file\n", encoding="utf-8")

        print("Before:")
        _print_tree(base)

        result = convert_directory_tree(base, first_removal="[raw] ", verify=True)

        print("After:")
        _print_tree(base)
        converted = sum(len(d.converted) for d in result.directories)
        print(f"Converted {converted} files in {result.elapsed_seconds:.3f}s")


if __name__ == "__main__":
    main()
