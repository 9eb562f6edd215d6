"""Pydantic schemas for runtime validation of run inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BatchRunConfig(BaseModel):
    """Validated input for a batch run over one base path."""

    model_config = ConfigDict(extra="forbid")

    base_path: Path
    first_removal: str = ""
    second_removal: str = ""
    max_workers: int | None = Field(default=None, ge=1)

    @field_validator("first_removal", "second_removal")
    @classmethod
    def _validate_removal(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("directory name removals cannot contain path separators.")
        return value
