"""Application-layer use-cases and option objects."""

from __future__ import annotations

from concurrent.futures import Executor
from pathlib import Path

from webp_converter.application.options import (
    ParityOptions,
    ProcessingOptions,
    RenameOptions,
)
from webp_converter.application.ports import ImageCodec, ParityChecker
from webp_converter.application.results import (
    ConversionResult,
    DirectoryResult,
    RunResult,
    SweepResult,
)


def build_processing_options(
    *,
    first_removal: str = "",
    second_removal: str = "",
    verify: bool = False,
    parity_atol: int = 0,
    max_workers: int | None = None,
) -> ProcessingOptions:
    """Build typed processing options via lazy use-case import."""
    from webp_converter.application.use_cases import build_processing_options as _impl

    return _impl(
        first_removal=first_removal,
        second_removal=second_removal,
        verify=verify,
        parity_atol=parity_atol,
        max_workers=max_workers,
    )


def convert_image(
    source_path: Path,
    *,
    options: ProcessingOptions | None = None,
    codec: ImageCodec | None = None,
    parity_checker: ParityChecker | None = None,
) -> ConversionResult:
    """Run single-file conversion use-case via lazy import."""
    from webp_converter.application.use_cases import convert_image as _impl

    return _impl(
        source_path,
        options=options,
        codec=codec,
        parity_checker=parity_checker,
    )


def process_directory(
    base_path: Path,
    directory_name: str,
    *,
    options: ProcessingOptions | None = None,
    codec: ImageCodec | None = None,
    parity_checker: ParityChecker | None = None,
    executor: Executor | None = None,
) -> DirectoryResult:
    """Run directory processing use-case via lazy import."""
    from webp_converter.application.use_cases import process_directory as _impl

    return _impl(
        base_path,
        directory_name,
        options=options,
        codec=codec,
        parity_checker=parity_checker,
        executor=executor,
    )


def sweep_base_directory(base_path: Path) -> SweepResult:
    """Run base path sweep use-case via lazy import."""
    from webp_converter.application.use_cases import sweep_base_directory as _impl

    return _impl(base_path)


def run_batch(
    *,
    base_path: Path,
    options: ProcessingOptions,
    codec: ImageCodec | None = None,
    parity_checker: ParityChecker | None = None,
) -> RunResult:
    """Run full batch use-case via lazy import."""
    from webp_converter.application.use_cases import run_batch as _impl

    return _impl(
        base_path=base_path,
        options=options,
        codec=codec,
        parity_checker=parity_checker,
    )


__all__ = [
    "ConversionResult",
    "DirectoryResult",
    "ImageCodec",
    "ParityChecker",
    "ParityOptions",
    "ProcessingOptions",
    "RenameOptions",
    "RunResult",
    "SweepResult",
    "build_processing_options",
    "convert_image",
    "process_directory",
    "run_batch",
    "sweep_base_directory",
]
