from __future__ import annotations

"""
Declarative Tree Entry Models.

Provides the immutable data structures describing a tree to be written:
an ordered sequence of (key, value) entries where each value is classified
into one of four variants (skip, empty file, content, subdirectory).
Building the model performs no filesystem access.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union

from treewriter.domain.errors import (
    ContentConversionError,
    InvalidKeyError,
    InvalidTreeError,
)

# -----------------------------------------------------------------------------
# VALUE VARIANTS
# -----------------------------------------------------------------------------

class Skip:
    """Declared but intentionally absent. Produces no operation."""

    _instance = None

    def __new__(cls) -> "Skip":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"


class EmptyFile:
    """Marker for a zero-length file."""

    _instance = None

    def __new__(cls) -> "EmptyFile":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY_FILE"


SKIP = Skip()
EMPTY_FILE = EmptyFile()


@dataclass(frozen=True)
class Content:
    """
    File contents, converted to bytes only when the entry is written.

    Attributes:
        value: A str or any object exposing the buffer protocol.
    """
    value: Any

    def to_bytes(self, encoding: str = "utf-8") -> bytes:
        """
        Convert the stored value to a byte string.

        Args:
            encoding: Codec applied to text values (strict error handling).

        Returns:
            bytes: The raw file contents.

        Raises:
            ContentConversionError: If the value is not text or a buffer,
                or if the text cannot be encoded.
        """
        value = self.value
        if isinstance(value, bytes):
            return value
        if isinstance(value, str):
            try:
                return value.encode(encoding)
            except (UnicodeEncodeError, LookupError) as e:
                raise ContentConversionError(value, encoding, str(e)) from e
        try:
            return bytes(memoryview(value))
        except TypeError as e:
            raise ContentConversionError(value, reason=str(e)) from e


@dataclass(frozen=True)
class Entry:
    """
    A single declared (key, value) pair.

    Attributes:
        key: Path segment, possibly containing separators.
        value: Classified value variant.
    """
    key: str
    value: "EntryValue"


@dataclass(frozen=True)
class Subdirectory:
    """
    A nested, ordered sequence of entries.

    Attributes:
        entries: Children in declaration order. Duplicate keys are kept.
    """
    entries: Tuple[Entry, ...] = ()

    @classmethod
    def of(cls, pairs: Iterable[Tuple[Any, Any]]) -> "Subdirectory":
        """Build a subdirectory from (key, value) pairs, keeping duplicates."""
        return cls(tuple(_make_entry(pair) for pair in pairs))

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


EntryValue = Union[Skip, EmptyFile, Content, Subdirectory]

# -----------------------------------------------------------------------------
# CLASSIFICATION API
# -----------------------------------------------------------------------------

def classify(value: Any) -> EntryValue:
    """
    Map a raw declared value onto its entry variant.

    Rules are checked by identity for the boolean and null sentinels so
    that numeric zero or one never masquerade as skip/empty markers.

    Args:
        value: Raw value from a tree literal.

    Returns:
        EntryValue: Skip, EmptyFile, Subdirectory or Content.
    """
    if isinstance(value, (Skip, EmptyFile, Content, Subdirectory)):
        return value
    if value is None or value is False:
        return SKIP
    if value is True:
        return EMPTY_FILE
    if isinstance(value, Mapping):
        return build_entries(value)
    pairs = _as_pairs(value)
    if pairs is not None:
        return Subdirectory.of(pairs)
    return Content(value)


def build_entries(tree: Any) -> Subdirectory:
    """
    Build the entry model for a whole tree.

    Args:
        tree: A mapping, an iterable of (key, value) pairs, or an
            existing Subdirectory.

    Returns:
        Subdirectory: The root sequence of entries.

    Raises:
        InvalidTreeError: If the tree has an unsupported shape.
        InvalidKeyError: If a key is not path-like.
    """
    if isinstance(tree, Subdirectory):
        return tree
    if isinstance(tree, Mapping):
        return Subdirectory.of(tree.items())
    if isinstance(tree, (str, bytes, bytearray)):
        raise InvalidTreeError(f"Tree must be a mapping or pairs, got {type(tree).__name__}")
    try:
        pairs = iter(tree)
    except TypeError as e:
        raise InvalidTreeError(
            f"Tree must be a mapping or pairs, got {type(tree).__name__}"
        ) from e
    return Subdirectory.of(pairs)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_pairs(value: Any) -> Optional[List[Tuple[Any, Any]]]:
    """
    Return the items of a nested (key, value) sequence, or None.

    Text and buffers are never sequences of pairs. Any other iterable whose
    items are all 2-tuples is one; an empty iterable is an empty directory.
    """
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return None
    try:
        memoryview(value)
    except TypeError:
        pass
    else:
        return None
    try:
        items = list(value)
    except TypeError:
        return None
    if all(isinstance(item, tuple) and len(item) == 2 for item in items):
        return items
    return None


def _make_entry(pair: Any) -> Entry:
    """Validate one (key, value) pair and classify its value."""
    try:
        key, value = pair
    except (TypeError, ValueError) as e:
        raise InvalidTreeError(f"Expected a (key, value) pair, got {pair!r}") from e
    return Entry(_normalize_key(key), classify(value))


def _normalize_key(key: Any) -> str:
    """Resolve a str or os.PathLike key to a str path segment."""
    try:
        segment = os.fspath(key)
    except TypeError:
        raise InvalidKeyError(key) from None
    if not isinstance(segment, str):
        raise InvalidKeyError(key)
    return segment
