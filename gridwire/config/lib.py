"""Environment configuration for gridwire.

Every variable the CLI reads is an `EnvVar` member carrying its name,
default and type. `get_environment()` resolves override > environment >
default and converts the raw string to the declared type.

Example:
    >>> from gridwire.config import EnvVar, get_environment
    >>>
    >>> embed = get_environment(EnvVar.EMBED_IMAGES)  # Returns bool
    >>> suffix = get_environment(EnvVar.OUTPUT_SUFFIX, override=".xml")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "GRIDWIRE_LOG_LEVEL").
        default: Value used when the variable is unset or unparsable.
        var_type: Target type (str, int, bool or Path).
        description: Human-readable description.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""


class EnvVar(Enum):
    """Environment variables read by the gridwire CLI."""

    LOG_LEVEL = EnvConfig(
        name="GRIDWIRE_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
    )
    IMAGE_BASE_DIR = EnvConfig(
        name="GRIDWIRE_IMAGE_BASE_DIR",
        default=None,  # Falls back to the source file's directory
        var_type=Path,
        description="Base directory for resolving relative img sources",
    )
    EMBED_IMAGES = EnvConfig(
        name="GRIDWIRE_EMBED_IMAGES",
        default=True,
        var_type=bool,
        description="Embed img sources as data URIs (false renders placeholders)",
    )
    OUTPUT_SUFFIX = EnvConfig(
        name="GRIDWIRE_OUTPUT_SUFFIX",
        default=".svg",
        var_type=str,
        description="Suffix for output files when no -o path is given",
    )
    EXCERPT_INDENT = EnvConfig(
        name="GRIDWIRE_EXCERPT_INDENT",
        default=2,
        var_type=int,
        description="Indentation of source excerpts in error reports",
    )


# =============================================================================
# Conversion
# =============================================================================

_BOOLEANS = {
    "true": True,
    "1": True,
    "yes": True,
    "false": False,
    "0": False,
    "no": False,
}


def _to_bool(raw: str) -> bool:
    return _BOOLEANS[raw.strip().lower()]


# Each converter raises KeyError or ValueError on input it cannot read
_CONVERTERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: int,
    bool: _to_bool,
    Path: Path,
}


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get a configuration value.

    Resolution priority: override, then the environment, then the default.
    A value that does not convert to the declared type yields the default.

    Example:
        >>> get_environment(EnvVar.OUTPUT_SUFFIX)
        '.svg'
        >>> get_environment(EnvVar.OUTPUT_SUFFIX, override=".xml")
        '.xml'
    """
    if override is not None:
        return override

    config: EnvConfig = env_var.value
    raw = os.environ.get(config.name)
    if raw is None:
        return config.default
    try:
        return _CONVERTERS[config.var_type](raw)
    except (KeyError, ValueError):
        return config.default


def get_image_base_dir(
    source_path: Path | str | None = None,
    override: Path | str | None = None,
) -> Path | None:
    """Get the base directory used to resolve relative image sources.

    Resolution: override > GRIDWIRE_IMAGE_BASE_DIR > directory of source_path

    Args:
        source_path: Path of the document being compiled, if any.
        override: Optional explicit directory.

    Returns:
        Resolved directory, or None when nothing is known.
    """
    if override is not None:
        return Path(override)

    env_path = get_environment(EnvVar.IMAGE_BASE_DIR)
    if env_path:
        return env_path

    if source_path is not None:
        return Path(source_path).resolve().parent

    return None


__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_image_base_dir",
]
