"""Application use-cases orchestrating the directory-scan-and-convert pipeline."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from webp_converter.adapters.codecs import PillowImageCodec
from webp_converter.adapters.parity_checkers import PngParityChecker
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
from webp_converter.errors import ConfigurationError, IoError
from webp_converter.infrastructure.filesystem import (
    delete_file,
    list_directories,
    list_files,
    read_bytes,
    rename_directory,
    write_bytes_atomic,
)
from webp_converter.schemas import BatchRunConfig
from webp_converter.validate import TARGET_SUFFIX, classify_file, is_canonical

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_processing_options(
    *,
    first_removal: str = "",
    second_removal: str = "",
    verify: bool = False,
    parity_atol: int = 0,
    max_workers: int | None = None,
) -> ProcessingOptions:
    """Build typed processing options from flat keyword arguments."""
    return ProcessingOptions(
        rename=RenameOptions(
            first_removal=first_removal,
            second_removal=second_removal,
        ),
        parity=ParityOptions(enabled=verify, atol=parity_atol),
        max_workers=max_workers,
    )


def _worker_count(options: ProcessingOptions) -> int:
    return options.max_workers or os.cpu_count() or 1


def _collect(futures: Sequence[Future[T]]) -> list[T]:
    """Wait for every future, then raise the first failure by completion order."""
    first_error: BaseException | None = None
    for future in as_completed(futures):
        exc = future.exception()
        if exc is not None and first_error is None:
            first_error = exc
    if first_error is not None:
        raise first_error
    return [future.result() for future in futures]


def convert_image(
    source_path: Path,
    *,
    options: ProcessingOptions | None = None,
    codec: ImageCodec | None = None,
    parity_checker: ParityChecker | None = None,
) -> ConversionResult:
    """Use-case: replace one WebP file with a PNG at the same stem.

    Parameters
    ----------
    source_path : Path
        Canonical WebP file.
    options : ProcessingOptions | None, default=None
        Parity settings are read from here.
    codec : ImageCodec | None, default=None
        Decoder/encoder pair; Pillow when omitted.
    parity_checker : ParityChecker | None, default=None
        Post-write verification; only consulted when parity is enabled.

    Returns
    -------
    ConversionResult
        Source and target paths.

    Raises
    ------
    ImageError
        If decoding or encoding fails, or the written PNG fails parity.
    IoError
        If reading, writing, or deleting the source fails.

    Notes
    -----
    Nothing is written or deleted when decoding fails. Parity runs on the
    temporary file before it replaces the target, so a failed check leaves
    both the WebP and any existing PNG untouched. When the final source delete
    fails, the PNG stays on disk next to the WebP.
    """
    options = options or ProcessingOptions()
    codec = codec or PillowImageCodec()
    parity_checker = parity_checker or PngParityChecker()

    image = codec.decode(read_bytes(source_path))
    target_path = source_path.with_suffix(TARGET_SUFFIX)

    def verify(written: Path) -> None:
        parity_checker.check(image, written, options.parity)

    write_bytes_atomic(
        target_path,
        codec.encode(image),
        check=verify if options.parity.enabled else None,
    )
    delete_file(source_path)
    logger.info("Converted %s to %s", source_path, target_path)
    return ConversionResult(source_path=source_path, target_path=target_path)


def process_directory(
    base_path: Path,
    directory_name: str,
    *,
    options: ProcessingOptions | None = None,
    codec: ImageCodec | None = None,
    parity_checker: ParityChecker | None = None,
    executor: Executor | None = None,
) -> DirectoryResult:
    """Use-case: convert every canonical WebP in one subdirectory, then rename it.

    Files are classified from a single listing snapshot. Extraneous files are
    deleted during the scan, ``.png`` files are left alone, and canonical
    WebP files are converted concurrently on ``executor`` (a private pool
    sized from ``options.max_workers`` when omitted). The directory is
    renamed only when every conversion succeeded.

    Raises
    ------
    IoError
        On any filesystem failure, including a rename onto an existing name.
    ImageError
        If any conversion fails; the directory keeps its name.
    """
    options = options or ProcessingOptions()
    codec = codec or PillowImageCodec()
    parity_checker = parity_checker or PngParityChecker()
    directory = base_path / directory_name

    candidates: list[Path] = []
    skipped: list[Path] = []
    deleted: list[Path] = []
    for path in list_files(directory):
        action = classify_file(path.name)
        if action == "convert":
            candidates.append(path)
        elif action == "skip":
            logger.info("Skipping PNG file %s", path)
            skipped.append(path)
        else:
            delete_file(path)
            deleted.append(path)

    def _submit_all(pool: Executor) -> list[ConversionResult]:
        futures = [
            pool.submit(
                convert_image,
                path,
                options=options,
                codec=codec,
                parity_checker=parity_checker,
            )
            for path in candidates
        ]
        return _collect(futures)

    if executor is not None:
        converted = _submit_all(executor)
    elif candidates:
        with ThreadPoolExecutor(max_workers=_worker_count(options)) as pool:
            converted = _submit_all(pool)
    else:
        converted = []

    new_name = options.rename.apply(directory_name)
    final_path = directory
    if new_name != directory_name:
        if not new_name:
            raise IoError(
                f"Cannot rename {directory}: removals leave an empty directory name."
            )
        final_path = rename_directory(base_path, directory_name, new_name)

    return DirectoryResult(
        name=directory_name,
        path=final_path,
        converted=tuple(converted),
        skipped=tuple(skipped),
        deleted=tuple(deleted),
    )


def sweep_base_directory(base_path: Path) -> SweepResult:
    """Use-case: delete every direct file of ``base_path`` with a non-canonical name.

    Directories are never touched. Running it twice deletes nothing the
    second time.
    """
    deleted: list[Path] = []
    for path in list_files(base_path):
        if not is_canonical(path.name):
            delete_file(path)
            deleted.append(path)
    return SweepResult(deleted=tuple(deleted))


def run_batch(
    *,
    base_path: Path,
    options: ProcessingOptions,
    codec: ImageCodec | None = None,
    parity_checker: ParityChecker | None = None,
) -> RunResult:
    """Use-case: process every subdirectory in parallel, then sweep the base path.

    Subdirectories run on one bounded pool and their file conversions on a
    second one, so directory tasks only ever wait on the file pool. All
    dispatched directories finish before the first failure is raised, and
    the sweep runs only when none failed. Elapsed time is logged either way.

    Raises
    ------
    ConfigurationError
        If the run parameters are invalid.
    ConversionError
        The first directory failure, by completion order.
    """
    try:
        config = BatchRunConfig(
            base_path=base_path,
            first_removal=options.rename.first_removal,
            second_removal=options.rename.second_removal,
            max_workers=options.max_workers,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid batch run parameters: {exc}") from exc

    codec = codec or PillowImageCodec()
    parity_checker = parity_checker or PngParityChecker()
    workers = _worker_count(options)

    start = time.perf_counter()
    try:
        names = list_directories(config.base_path)
        with (
            ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="webp-dir"
            ) as directory_pool,
            ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="webp-file"
            ) as file_pool,
        ):
            futures = [
                directory_pool.submit(
                    process_directory,
                    config.base_path,
                    name,
                    options=options,
                    codec=codec,
                    parity_checker=parity_checker,
                    executor=file_pool,
                )
                for name in names
            ]
            directories = _collect(futures)
        sweep = sweep_base_directory(config.base_path)
    finally:
        elapsed = time.perf_counter() - start
        logger.info("Elapsed: %.3fs", elapsed)

    return RunResult(
        base_path=config.base_path,
        directories=tuple(directories),
        sweep=sweep,
        elapsed_seconds=elapsed,
    )
