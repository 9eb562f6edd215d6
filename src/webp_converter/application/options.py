"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenameOptions:
    """Literal substrings stripped from each processed directory name.

    An empty string disables the corresponding removal.
    """

    first_removal: str = ""
    second_removal: str = ""

    def apply(self, name: str) -> str:
        """Return ``name`` with both removals applied in order."""
        for removal in (self.first_removal, self.second_removal):
            if removal:
                name = name.replace(removal, "")
        return name


@dataclass(frozen=True)
class ParityOptions:
    """Pixel parity check configuration."""

    enabled: bool = False
    atol: int = 0


@dataclass(frozen=True)
class ProcessingOptions:
    """Shared processing options passed through use-cases."""

    rename: RenameOptions = RenameOptions()
    parity: ParityOptions = ParityOptions()
    max_workers: int | None = None
