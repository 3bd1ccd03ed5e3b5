from __future__ import annotations

"""
Tree Writer Configuration Models.

Defines the immutable runtime settings shared by the interpreter and the
public entry points, plus helpers to build them from plain dictionaries.
"""

import codecs
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from treewriter.domain.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
DEFAULT_TEMP_PREFIX = "treewriter-"


@dataclass(frozen=True)
class WriterConfig:
    """
    Immutable settings for a tree materialization run.

    Attributes:
        encoding: Codec used to turn text contents into bytes.
        temp_prefix: Name prefix of allocated ephemeral directories.
        temp_suffix: Name suffix of allocated ephemeral directories.
        temp_parent: Parent directory for ephemeral roots (None = system temp).
        log_operations: Emit a DEBUG record for every filesystem effect.
    """
    encoding: str = DEFAULT_ENCODING
    temp_prefix: str = DEFAULT_TEMP_PREFIX
    temp_suffix: str = ""
    temp_parent: Optional[str] = None
    log_operations: bool = False

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as e:
            raise ConfigError(f"Unknown encoding: {self.encoding!r}") from e


def get_default_config() -> WriterConfig:
    """Return the default runtime configuration."""
    return WriterConfig()


def config_from_dict(data: Optional[Dict[str, Any]]) -> WriterConfig:
    """
    Build a configuration from a plain dictionary.

    Unknown keys are ignored with a warning so that configuration files
    written for newer versions keep loading.

    Args:
        data: Raw key/value settings. None yields the defaults.

    Returns:
        WriterConfig: Validated configuration.

    Raises:
        ConfigError: If a value is rejected.
    """
    if not data:
        return get_default_config()

    known = {f.name for f in fields(WriterConfig)}
    accepted: Dict[str, Any] = {}
    for key, value in data.items():
        if key in known:
            accepted[key] = value
        else:
            logger.warning(f"Ignoring unknown configuration key: {key}")

    if "log_operations" in accepted:
        accepted["log_operations"] = bool(accepted["log_operations"])

    return WriterConfig(**accepted)
