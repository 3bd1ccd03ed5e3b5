"""treewriter: materialize declarative directory/file trees in one call."""

import logging

from treewriter.core.services.creator import create, create_temp, plan
from treewriter.domain.config import WriterConfig, config_from_dict, get_default_config
from treewriter.domain.entry_models import (
    EMPTY_FILE,
    SKIP,
    Content,
    EmptyFile,
    Entry,
    Skip,
    Subdirectory,
    build_entries,
    classify,
)
from treewriter.domain.errors import (
    ConfigError,
    ContentConversionError,
    InvalidKeyError,
    InvalidTreeError,
    SimulatedFailureError,
    TreeWriterError,
)
from treewriter.infra.fs import DirOp, FileOp, LocalBackend, RecordingBackend, StorageBackend
from treewriter.infra.tempdir import TempDir

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "create",
    "create_temp",
    "plan",
    "WriterConfig",
    "config_from_dict",
    "get_default_config",
    "Entry",
    "Skip",
    "EmptyFile",
    "Content",
    "Subdirectory",
    "SKIP",
    "EMPTY_FILE",
    "build_entries",
    "classify",
    "TreeWriterError",
    "InvalidKeyError",
    "InvalidTreeError",
    "ContentConversionError",
    "ConfigError",
    "SimulatedFailureError",
    "StorageBackend",
    "LocalBackend",
    "RecordingBackend",
    "DirOp",
    "FileOp",
    "TempDir",
]
