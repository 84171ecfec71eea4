"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    FileLoggingConfig,
    FinderConfig,
    FixLocatorConfig,
    LocatorConfig,
    LoggingConfig,
    PreferencesConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "FixLocatorConfig",
    # Section configs
    "LocatorConfig",
    "FinderConfig",
    "PreferencesConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
