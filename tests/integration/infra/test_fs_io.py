from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates the local backend against a real temporary directory: idempotent
directory creation, overwrite semantics and the missing-parent fallback.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from treewriter.domain.errors import SimulatedFailureError
from treewriter.infra.fs import DirOp, FileOp, LocalBackend, RecordingBackend

# -----------------------------------------------------------------------------
# LOCAL BACKEND TESTS
# -----------------------------------------------------------------------------

def test_create_dir_is_recursive_and_idempotent(tmp_path: Path) -> None:
    """TC-01: Verify ancestors are created and a second call succeeds."""
    backend = LocalBackend()
    target = tmp_path / "deep" / "nested" / "dir"

    backend.create_dir(str(target))
    backend.create_dir(str(target))

    assert target.is_dir()


def test_create_dir_over_file_fails(tmp_path: Path) -> None:
    """TC-02: Verify a directory cannot replace an existing file."""
    (tmp_path / "taken").write_text("file")
    with pytest.raises(FileExistsError):
        LocalBackend().create_dir(str(tmp_path / "taken"))


def test_write_file_overwrites(tmp_path: Path) -> None:
    """TC-03: Verify writes replace previous contents entirely."""
    backend = LocalBackend()
    target = tmp_path / "file.txt"

    backend.write_file(str(target), b"a much longer first version")
    backend.write_file(str(target), b"short")

    assert target.read_bytes() == b"short"


def test_write_file_creates_missing_parents(tmp_path: Path) -> None:
    """TC-04: Verify the fallback creates intermediate directories for separator keys."""
    target = tmp_path / "path" / "as" / "name"
    LocalBackend().write_file(str(target), b"")

    assert (tmp_path / "path" / "as").is_dir()
    assert target.read_bytes() == b""


def test_write_file_retries_only_once(tmp_path: Path) -> None:
    """TC-05: Verify a second FileNotFoundError propagates after one retry."""
    target = str(tmp_path / "missing" / "file")
    error = FileNotFoundError(2, "still missing")
    with patch("treewriter.infra.fs._write_bytes", side_effect=error) as mocked:
        with pytest.raises(FileNotFoundError) as exc_info:
            LocalBackend().write_file(target, b"x")

    assert mocked.call_count == 2
    assert exc_info.value is error


def test_write_file_other_errors_propagate(tmp_path: Path) -> None:
    """TC-06: Verify non-NotFound errors skip the fallback."""
    with patch("treewriter.infra.fs._write_bytes", side_effect=PermissionError("denied")) as mocked:
        with patch("os.makedirs") as makedirs:
            with pytest.raises(PermissionError):
                LocalBackend().write_file(str(tmp_path / "f"), b"x")

    assert mocked.call_count == 1
    makedirs.assert_not_called()


def test_write_file_without_parent_component_propagates(tmp_path: Path) -> None:
    """TC-07: Verify a bare file name has no parent to create."""
    with patch("treewriter.infra.fs._write_bytes", side_effect=FileNotFoundError("gone")):
        with pytest.raises(FileNotFoundError):
            LocalBackend().write_file("orphan", b"x")

# -----------------------------------------------------------------------------
# RECORDING BACKEND TESTS
# -----------------------------------------------------------------------------

def test_recording_backend_logs_in_order() -> None:
    """TC-08: Verify operations are recorded in call order and consume() resets the log."""
    backend = RecordingBackend()
    backend.create_dir("a")
    backend.write_file("a/b", bytearray(b"x"))

    assert backend.operations == [DirOp("a"), FileOp("a/b", b"x")]
    assert backend.consume() == [DirOp("a"), FileOp("a/b", b"x")]
    assert backend.operations == []


def test_recording_backend_failures_are_not_recorded() -> None:
    """TC-09: Verify injected failures raise an OSError and leave no record."""
    backend = RecordingBackend(fail_paths=[Path("x")])
    with pytest.raises(OSError) as exc_info:
        backend.create_dir("x")

    assert isinstance(exc_info.value, SimulatedFailureError)
    assert exc_info.value.path == "x"
    assert "x" in str(exc_info.value)
    assert backend.operations == []


def test_recording_backend_never_touches_disk(tmp_path: Path) -> None:
    """TC-10: Verify recorded operations leave the filesystem untouched."""
    backend = RecordingBackend()
    backend.create_dir(os.path.join(str(tmp_path), "ghost"))
    assert not (tmp_path / "ghost").exists()
