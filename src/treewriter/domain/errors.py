from __future__ import annotations

"""
Tree Writer Error Taxonomy.

Defines the exceptions raised by the package itself. Storage failures are
deliberately absent: backends raise native OSError subclasses, which travel
to the caller untouched.
"""

from typing import Any, Optional


class TreeWriterError(Exception):
    """Base class for every error raised by treewriter."""


class InvalidKeyError(TreeWriterError, TypeError):
    """
    Raised while building the entry model when a key is not path-like.

    Attributes:
        key: The offending key object.
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(
            f"Entry key must be str or os.PathLike, got {type(key).__name__}: {key!r}"
        )


class InvalidTreeError(TreeWriterError, TypeError):
    """Raised when a tree is neither a mapping nor a sequence of (key, value) pairs."""


class ContentConversionError(TreeWriterError, ValueError):
    """
    Raised when a content value cannot be turned into bytes.

    Attributes:
        value: The value that failed conversion.
        encoding: Codec used for text values, if any.
    """

    def __init__(self, value: Any, encoding: Optional[str] = None, reason: str = "") -> None:
        self.value = value
        self.encoding = encoding
        msg = f"Cannot convert {type(value).__name__} to bytes"
        if encoding:
            msg += f" using '{encoding}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ConfigError(TreeWriterError, ValueError):
    """Raised when a configuration value is rejected."""


class SimulatedFailureError(OSError):
    """
    Injected failure raised by the in-memory recording backend.

    Attributes:
        path: Path whose operation was configured to fail.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Simulated failure for '{path}'")
        self.path = path
