"""Environment configuration for gridwire.

Example:
    >>> from gridwire.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.LOG_LEVEL)  # Returns str: "INFO"
    >>> level = get_environment(EnvVar.LOG_LEVEL, override="DEBUG")
"""

from .lib import EnvConfig, EnvVar, get_environment, get_image_base_dir

__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_image_base_dir",
]
