"""Shared infrastructure: configuration, logging and the exception hierarchy."""

from manify.core.config import LoggingConfig, ManifyConfig, load_config
from manify.core.exceptions import (
    ClassNotFoundError,
    ConfigurationError,
    FileWriteError,
    ManifyError,
)

__all__ = [
    "ClassNotFoundError",
    "ConfigurationError",
    "FileWriteError",
    "LoggingConfig",
    "ManifyConfig",
    "ManifyError",
    "load_config",
]
