from __future__ import annotations

"""
Tree Creation Service.

Public entry points composing the entry model, the interpreter and the
storage collaborators: materialize under an existing root, materialize under
a fresh ephemeral root, or plan the operations without touching the disk.
"""

import logging
import os
from typing import Any, List, Optional

from treewriter.core.interpreter import walk
from treewriter.domain.config import WriterConfig, get_default_config
from treewriter.domain.entry_models import build_entries
from treewriter.infra import tempdir
from treewriter.infra.fs import LocalBackend, Operation, RecordingBackend, StorageBackend
from treewriter.infra.tempdir import TempDir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def create(
        root_path: Any,
        tree: Any,
        *,
        backend: Optional[StorageBackend] = None,
        config: Optional[WriterConfig] = None,
) -> None:
    """
    Materialize a declared tree below an existing root directory.

    Entries are applied in declaration order. The first failure aborts the
    run and is re-raised unchanged; everything created before it remains.

    Args:
        root_path: Directory the top-level keys are joined to.
        tree: Mapping or (key, value) pairs describing the tree.
        backend: Storage primitives (defaults to the local filesystem).
        config: Runtime settings (defaults to get_default_config()).

    Raises:
        OSError: First storage failure.
        TreeWriterError: Invalid tree, key or content.
    """
    cfg = config or get_default_config()
    entries = build_entries(tree)
    root = os.fspath(root_path)
    target = backend if backend is not None else LocalBackend()

    logger.info(f"Creating {len(entries)} top-level entries under: {root or '.'}")
    try:
        walk(target, root, entries, cfg.encoding, cfg.log_operations)
    except Exception as e:
        logger.error(f"Tree creation aborted under '{root or '.'}': {e}")
        raise
    logger.info("Tree creation complete.")


def create_temp(tree: Any, *, config: Optional[WriterConfig] = None) -> TempDir:
    """
    Materialize a declared tree inside a freshly allocated ephemeral directory.

    Args:
        tree: Mapping or (key, value) pairs describing the tree.
        config: Runtime settings, including temporary directory naming.

    Returns:
        TempDir: Handle whose cleanup removes the whole directory.

    Raises:
        OSError: First storage failure; the ephemeral root is removed first.
        TreeWriterError: Invalid tree, key or content.
    """
    cfg = config or get_default_config()
    entries = build_entries(tree)
    handle = tempdir.allocate(cfg)
    try:
        create(handle.path, entries, config=cfg)
    except BaseException:
        handle.cleanup()
        raise
    return handle


def plan(tree: Any, root_path: Any = "", *, config: Optional[WriterConfig] = None) -> List[Operation]:
    """
    Compute the operations `create` would issue, without side effects.

    Args:
        tree: Mapping or (key, value) pairs describing the tree.
        root_path: Root the paths are computed against.
        config: Runtime settings (encoding of text contents).

    Returns:
        List[Operation]: DirOp/FileOp records in execution order.
    """
    cfg = config or get_default_config()
    recorder = RecordingBackend()
    walk(recorder, os.fspath(root_path), build_entries(tree), cfg.encoding, cfg.log_operations)
    return recorder.consume()
