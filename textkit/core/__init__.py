"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config, TextConfig
from .logger import get_logger, setup_logging, setup_logging_from_config
from .exceptions import (
    TextKitError,
    ConfigurationError,
    EntropyUnavailableError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "TextConfig",
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    "TextKitError",
    "ConfigurationError",
    "EntropyUnavailableError"
]
