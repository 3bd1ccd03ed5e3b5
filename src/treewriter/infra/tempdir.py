from __future__ import annotations

"""
Ephemeral Directory Provider.

Allocates uniquely named temporary roots and hands out an owning handle.
Cleaning up the handle (explicitly, via a 'with' block, or when it is
garbage collected) removes the directory and everything written below it.
"""

import logging
import tempfile
from typing import Optional

from treewriter.domain.config import WriterConfig, get_default_config

logger = logging.getLogger(__name__)


class TempDir:
    """
    Owning handle to an ephemeral directory.

    Attributes:
        path: Absolute path of the allocated directory.
    """

    def __init__(self, temp_dir_obj: tempfile.TemporaryDirectory) -> None:
        self._temp_dir_obj = temp_dir_obj
        self.path: str = temp_dir_obj.name
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def cleanup(self) -> None:
        """Recursively delete the directory. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._temp_dir_obj.cleanup()
        logger.debug(f"Ephemeral directory removed: {self.path}")

    def __enter__(self) -> "TempDir":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def __fspath__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<TempDir {self.path!r} ({state})>"


def allocate(config: Optional[WriterConfig] = None) -> TempDir:
    """
    Allocate a fresh, empty, uniquely named directory.

    Args:
        config: Provides prefix, suffix and parent directory of the root.

    Returns:
        TempDir: Handle owning the new directory.
    """
    cfg = config or get_default_config()
    temp_dir_obj = tempfile.TemporaryDirectory(
        suffix=cfg.temp_suffix or None,
        prefix=cfg.temp_prefix,
        dir=cfg.temp_parent,
    )
    logger.debug(f"Ephemeral directory allocated: {temp_dir_obj.name}")
    return TempDir(temp_dir_obj)
