#!/usr/bin/env python3
"""
webp_converter.cli.app

Typer-based CLI that converts WebP images to PNG below a base directory.

Every direct subdirectory of the base path is processed in parallel: canonical
``.webp`` files become ``.png``, stray files are deleted, ``.png`` files are
kept, and the directory is renamed. Afterwards stray files in the base path
itself are removed.

Examples
--------
Install with the CLI:

    uv pip install -e .

Run against a directory:

    webp-to-png --base-path ~/Downloads/comics
"""

from __future__ import annotations

import logging
import time
import traceback
from pathlib import Path

import typer

from webp_converter.errors import ConversionError

DEFAULT_BASE_PATH = Path("webp")
LOG_FORMAT = "%(message)s"

app = typer.Typer(
    name="webp-to-png",
    help="Convert WebP images to PNG in every subdirectory of a base path.",
    add_completion=False,
)


def _print_conversion_error(exc: Exception) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during the run.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if not isinstance(exc, ConversionError):
        typer.echo("".join(traceback.format_exception(exc)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


@app.command()
def main(
    base_path: Path = typer.Option(
        DEFAULT_BASE_PATH,
        "--base-path",
        "-b",
        help="Base path for processing.",
    ),
) -> None:
    """Convert WebP images to PNG in every subdirectory of the base path.

    Processed directories are renamed and stray files in the base path are
    deleted afterwards.
    """
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    start = time.perf_counter()
    typer.echo("Processing started...")

    try:
        from webp_converter.api import convert_directory_tree

        convert_directory_tree(base_path=base_path)
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc))
    except Exception as exc:
        # Unexpected crash: still show a clean message plus the traceback.
        raise typer.Exit(code=_print_conversion_error(exc))

    typer.echo(f"Elapsed: {time.perf_counter() - start:.3f}s")


if __name__ == "__main__":
    app()
