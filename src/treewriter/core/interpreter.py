from __future__ import annotations

"""
Tree Interpreter.

Walks an entry model depth-first, pre-order, left to right, and turns every
entry into at most one storage operation. The first failure stops the whole
walk and reaches the caller as the very same exception object; effects that
already happened stay in place.
"""

import logging
import os

from treewriter.domain.config import DEFAULT_ENCODING
from treewriter.domain.entry_models import (
    Content,
    EmptyFile,
    Entry,
    Skip,
    Subdirectory,
)
from treewriter.infra.fs import StorageBackend

logger = logging.getLogger(__name__)

EMPTY_BYTES = b""


def walk(
        backend: StorageBackend,
        parent_path: str,
        entries: Subdirectory,
        encoding: str = DEFAULT_ENCODING,
        log_operations: bool = False,
) -> None:
    """
    Apply every entry of a sequence below a parent path, in order.

    Args:
        backend: Storage primitives to call.
        parent_path: Directory the entry keys are joined to.
        entries: Ordered entries of one directory level.
        encoding: Codec for text contents.
        log_operations: Emit a DEBUG record per operation.

    Raises:
        OSError: First backend failure, unchanged.
        ContentConversionError: First content that could not become bytes.
    """
    for entry in entries:
        apply_entry(backend, parent_path, entry, encoding, log_operations)


def apply_entry(
        backend: StorageBackend,
        parent_path: str,
        entry: Entry,
        encoding: str = DEFAULT_ENCODING,
        log_operations: bool = False,
) -> None:
    """
    Apply a single entry, recursing into subdirectories after creating them.
    """
    path = os.path.join(parent_path, entry.key)
    value = entry.value

    if isinstance(value, Skip):
        return

    if isinstance(value, EmptyFile):
        if log_operations:
            logger.debug(f"write_file {path} (empty)")
        backend.write_file(path, EMPTY_BYTES)
        return

    if isinstance(value, Content):
        # Convert first: a bad value must never reach the backend
        data = value.to_bytes(encoding)
        if log_operations:
            logger.debug(f"write_file {path} ({len(data)} bytes)")
        backend.write_file(path, data)
        return

    if isinstance(value, Subdirectory):
        if log_operations:
            logger.debug(f"create_dir {path}")
        backend.create_dir(path)
        walk(backend, path, value, encoding, log_operations)
        return

    raise TypeError(f"Unclassified entry value: {value!r}")
