"""
Logging helpers for textkit.

Library modules only ask for named loggers; handlers are attached by the
host application, or by setup_logging / setup_logging_from_config when
textkit runs as a script.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


_logger_initialized = False

LOG_FILENAME = "textkit.log"


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> None:
    """
    Attach console and optional rotating file handlers to the root logger.

    Only the first call has an effect.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        logs_directory: Directory for textkit.log. If None, file logging disabled.
        max_file_size_mb: Maximum size of each log file in MB.
        backup_count: Number of rotated files to keep.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _logger_initialized = True


def setup_logging_from_config(config_path: Path = None) -> None:
    """
    Set up logging from the "logging" and "paths" sections of config.json.

    Falls back to console-only defaults when no config file can be found.

    Args:
        config_path: Optional path to config file; searched upward otherwise.
    """
    from .config_loader import get_config
    from .exceptions import ConfigurationError

    try:
        config = get_config(config_path)
    except ConfigurationError:
        setup_logging()
        return

    setup_logging(
        log_level=config.logging.level,
        log_format=config.logging.format,
        logs_directory=config.paths.logs_directory,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance without touching handler configuration.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


if __name__ == "__main__":
    setup_logging_from_config()

    logger = get_logger("textkit.core.logger")
    logger.debug("Debug message")
    logger.info("Info message")
    logger.warning("Warning message")
