from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the storage backends the interpreter writes through: an abstract
interface, the real local filesystem implementation, and an in-memory
recorder used for dry runs and tests.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Set, Union

from treewriter.domain.errors import SimulatedFailureError

logger = logging.getLogger(__name__)

PathType = Union[str, "os.PathLike[str]"]

# -----------------------------------------------------------------------------
# BACKEND INTERFACE
# -----------------------------------------------------------------------------

class StorageBackend(ABC):
    """
    Abstract pair of primitives a tree is materialized through.
    """

    @abstractmethod
    def create_dir(self, path: str) -> None:
        """
        Create a directory and any missing ancestors.

        Must succeed when the directory already exists.

        Args:
            path: Directory to create.

        Raises:
            OSError: If the directory cannot be created.
        """
        pass

    @abstractmethod
    def write_file(self, path: str, data: bytes) -> None:
        """
        Write (overwrite) the full contents of a file.

        Args:
            path: Target file.
            data: Raw contents.

        Raises:
            OSError: If the file cannot be written.
        """
        pass

# -----------------------------------------------------------------------------
# LOCAL FILESYSTEM
# -----------------------------------------------------------------------------

class LocalBackend(StorageBackend):
    """
    Backend writing to the host filesystem through the 'os' module.
    """

    def create_dir(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def write_file(self, path: str, data: bytes) -> None:
        """
        Write a file, creating its parent hierarchy once if it is missing.

        Only FileNotFoundError triggers the fallback; every other error and
        any failure of the retry propagate unchanged.
        """
        try:
            _write_bytes(path, data)
        except FileNotFoundError:
            parent = os.path.dirname(path)
            if not parent:
                raise
            logger.debug(f"Parent missing for '{path}', creating '{parent}'")
            os.makedirs(parent, exist_ok=True)
            _write_bytes(path, data)

# -----------------------------------------------------------------------------
# IN-MEMORY RECORDER
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirOp:
    """Recorded directory creation."""
    path: str


@dataclass(frozen=True)
class FileOp:
    """Recorded file write."""
    path: str
    data: bytes


Operation = Union[DirOp, FileOp]


class RecordingBackend(StorageBackend):
    """
    Backend that only records operations, in call order.

    Paths registered through `fail` raise SimulatedFailureError instead of
    being recorded, which makes partial-application scenarios reproducible
    without touching the disk.
    """

    def __init__(self, fail_paths: Iterable[PathType] = ()) -> None:
        self._ops: List[Operation] = []
        self._fail_paths: Set[str] = {os.fspath(p) for p in fail_paths}

    def fail(self, path: PathType) -> None:
        """Register a path whose operations must fail."""
        self._fail_paths.add(os.fspath(path))

    @property
    def operations(self) -> List[Operation]:
        return list(self._ops)

    def consume(self) -> List[Operation]:
        """Return the recorded operations and reset the log."""
        ops, self._ops = self._ops, []
        return ops

    def create_dir(self, path: str) -> None:
        self._check(path)
        self._ops.append(DirOp(path))

    def write_file(self, path: str, data: bytes) -> None:
        self._check(path)
        self._ops.append(FileOp(path, bytes(data)))

    def _check(self, path: str) -> None:
        if path in self._fail_paths:
            raise SimulatedFailureError(path)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _write_bytes(path: str, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)
