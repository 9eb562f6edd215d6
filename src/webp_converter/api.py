"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from webp_converter.application.results import RunResult
from webp_converter.application.use_cases import build_processing_options
from webp_converter.application.use_cases import convert_image
from webp_converter.application.use_cases import run_batch


def convert_webp_file_to_png(
    source_path: Path,
    verify: bool = False,
    parity_atol: int = 0,
) -> Path:
    """Convert one WebP file to PNG in place and return the PNG path."""
    options = build_processing_options(verify=verify, parity_atol=parity_atol)
    result = convert_image(source_path, options=options)
    return result.target_path


def convert_directory_tree(
    base_path: Path,
    first_removal: str = "",
    second_removal: str = "",
    verify: bool = False,
    parity_atol: int = 0,
    max_workers: Optional[int] = None,
) -> RunResult:
    """Convert every subdirectory of ``base_path`` and sweep stray files."""
    options = build_processing_options(
        first_removal=first_removal,
        second_removal=second_removal,
        verify=verify,
        parity_atol=parity_atol,
        max_workers=max_workers,
    )
    return run_batch(base_path=base_path, options=options)
