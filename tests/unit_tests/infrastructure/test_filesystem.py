"""Unit tests for the filesystem adapter."""

from __future__ import annotations

import logging
import os
import stat
import threading
import time
from pathlib import Path

import pytest

from webp_converter.errors import IoError, ParityError
from webp_converter.infrastructure import filesystem
from webp_converter.infrastructure.filesystem import (
    delete_file,
    list_directories,
    list_files,
    read_bytes,
    rename_directory,
    write_bytes_atomic,
)


def test_delete_file_removes_and_logs(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Remove the file and emit an audit log line naming it."""
    path = tmp_path / "x.txt"
    path.write_text("x")

    with caplog.at_level(logging.INFO, logger="webp_converter"):
        delete_file(path)

    assert not path.exists()
    assert f"Deleted {path}" in caplog.text


def test_delete_file_missing_raises_io_error(tmp_path: Path) -> None:
    """Surface a missing path as an IoError."""
    with pytest.raises(IoError, match="Failed to delete") as info:
        delete_file(tmp_path / "missing.txt")

    assert info.value.kind == "io"
    assert isinstance(info.value.__cause__, FileNotFoundError)


def test_delete_file_rejects_directory(tmp_path: Path) -> None:
    """Refuse to delete directories."""
    directory = tmp_path / "sub"
    directory.mkdir()

    with pytest.raises(IoError):
        delete_file(directory)

    assert directory.is_dir()


def test_list_directories_ignores_files(tmp_path: Path) -> None:
    """Return only direct subdirectory names, sorted."""
    (tmp_path / "b").mkdir()
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "nested").mkdir()
    (tmp_path / "file.txt").write_text("x")

    assert list_directories(tmp_path) == ["a", "b"]


def test_list_directories_missing_base_raises(tmp_path: Path) -> None:
    """Raise IoError when the base path does not exist."""
    with pytest.raises(IoError, match="Failed to list directories"):
        list_directories(tmp_path / "missing")


def test_list_files_is_non_recursive(tmp_path: Path) -> None:
    """Return direct files only, ignoring subdirectories and their contents."""
    (tmp_path / "z.webp").write_bytes(b"z")
    (tmp_path / "a.png").write_bytes(b"a")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "inner.webp").write_bytes(b"i")

    assert list_files(tmp_path) == [tmp_path / "a.png", tmp_path / "z.webp"]


def test_read_bytes_missing_raises(tmp_path: Path) -> None:
    """Wrap read failures in IoError."""
    with pytest.raises(IoError, match="Failed to read"):
        read_bytes(tmp_path / "missing.webp")


def test_write_bytes_atomic_replaces_target(tmp_path: Path) -> None:
    """Write the payload and leave no temporary files behind."""
    target = tmp_path / "a.png"
    target.write_bytes(b"old")

    write_bytes_atomic(target, b"new")

    assert target.read_bytes() == b"new"
    assert sorted(os.listdir(tmp_path)) == ["a.png"]


def test_write_bytes_atomic_cleans_up_on_failure(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Remove the temporary file and never create the target when the move fails."""
    target = tmp_path / "a.png"

    def fail_replace(src: str, dst: object) -> None:
        raise PermissionError(13, "Permission denied", str(dst))

    monkeypatch.setattr(filesystem.os, "replace", fail_replace)

    with pytest.raises(IoError, match="Failed to write"):
        write_bytes_atomic(target, b"data")

    assert os.listdir(tmp_path) == []


def test_write_bytes_atomic_uses_umask_mode(tmp_path: Path) -> None:
    """Give the target the same permissions as a normally created file."""
    reference = tmp_path / "reference.txt"
    reference.write_bytes(b"x")
    target = tmp_path / "a.png"

    write_bytes_atomic(target, b"data")

    assert stat.S_IMODE(target.stat().st_mode) == stat.S_IMODE(reference.stat().st_mode)


def test_write_bytes_atomic_runs_check_before_replace(tmp_path: Path) -> None:
    """Pass the written temporary file to the check while the target is untouched."""
    target = tmp_path / "a.png"
    target.write_bytes(b"old")
    seen: list[tuple[Path, bytes, bytes]] = []

    def check(written: Path) -> None:
        seen.append((written, written.read_bytes(), target.read_bytes()))

    write_bytes_atomic(target, b"new", check=check)

    assert len(seen) == 1
    written, payload, current = seen[0]
    assert written.parent == tmp_path
    assert written != target
    assert (payload, current) == (b"new", b"old")
    assert target.read_bytes() == b"new"
    assert sorted(os.listdir(tmp_path)) == ["a.png"]


def test_write_bytes_atomic_check_failure_keeps_target(tmp_path: Path) -> None:
    """Keep the existing target and propagate the check error unchanged."""
    target = tmp_path / "a.png"
    target.write_bytes(b"old")

    def check(written: Path) -> None:
        raise ParityError("parity failed")

    with pytest.raises(ParityError, match="parity failed"):
        write_bytes_atomic(target, b"new", check=check)

    assert target.read_bytes() == b"old"
    assert sorted(os.listdir(tmp_path)) == ["a.png"]


def test_write_bytes_atomic_missing_directory(tmp_path: Path) -> None:
    """Raise IoError when the parent directory is missing."""
    with pytest.raises(IoError):
        write_bytes_atomic(tmp_path / "missing" / "a.png", b"data")


def test_rename_directory_moves(tmp_path: Path) -> None:
    """Rename the directory and keep its contents."""
    (tmp_path / "old").mkdir()
    (tmp_path / "old" / "a.png").write_bytes(b"a")

    result = rename_directory(tmp_path, "old", "new")

    assert result == tmp_path / "new"
    assert (tmp_path / "new" / "a.png").exists()
    assert not (tmp_path / "old").exists()


def test_rename_directory_refuses_existing_target(tmp_path: Path) -> None:
    """Never overwrite an existing entry, even an empty directory."""
    (tmp_path / "old").mkdir()
    (tmp_path / "new").mkdir()

    with pytest.raises(IoError, match="Failed to rename") as info:
        rename_directory(tmp_path, "old", "new")

    assert isinstance(info.value.__cause__, FileExistsError)
    assert (tmp_path / "old").is_dir()


def test_rename_directory_missing_source(tmp_path: Path) -> None:
    """Surface a vanished source directory as IoError."""
    with pytest.raises(IoError):
        rename_directory(tmp_path, "gone", "new")


def test_rename_directory_serializes_concurrent_renames(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Let only one of two siblings claim the same new name."""
    (tmp_path / "A_x").mkdir()
    (tmp_path / "A_x" / "x.png").write_bytes(b"x")
    (tmp_path / "A_y").mkdir()
    (tmp_path / "A_y" / "y.png").write_bytes(b"y")

    real_lexists = os.path.lexists
    active = 0
    peak = 0
    counter_lock = threading.Lock()

    def slow_lexists(path: object) -> bool:
        nonlocal active, peak
        with counter_lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.05)
        with counter_lock:
            active -= 1
        return real_lexists(path)

    monkeypatch.setattr(filesystem.os.path, "lexists", slow_lexists)
    errors: list[IoError] = []

    def rename(old_name: str) -> None:
        try:
            rename_directory(tmp_path, old_name, "A")
        except IoError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=rename, args=(name,)) for name in ("A_x", "A_y")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert peak == 1
    assert len(errors) == 1
    assert isinstance(errors[0].__cause__, FileExistsError)
    remaining = sorted(p.name for p in tmp_path.iterdir())
    assert remaining in (["A", "A_x"], ["A", "A_y"])
    assert len(list((tmp_path / "A").iterdir())) == 1
