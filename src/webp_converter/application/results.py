"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ConversionResult:
    """Single file conversion outcome."""

    source_path: Path
    target_path: Path


@dataclass(frozen=True)
class DirectoryResult:
    """Outcome of processing one subdirectory."""

    name: str
    path: Path
    converted: tuple[ConversionResult, ...] = ()
    skipped: tuple[Path, ...] = ()
    deleted: tuple[Path, ...] = ()


@dataclass(frozen=True)
class SweepResult:
    """Files removed from the base path."""

    deleted: tuple[Path, ...] = ()


@dataclass(frozen=True)
class RunResult:
    """Structured outcome of a full batch run."""

    base_path: Path
    directories: tuple[DirectoryResult, ...] = ()
    sweep: SweepResult = field(default_factory=SweepResult)
    elapsed_seconds: float = 0.0
