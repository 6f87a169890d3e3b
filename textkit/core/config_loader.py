"""
Configuration loader for textkit.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    logs_directory: Optional[Path] = None


@dataclass
class TextConfig:
    """Defaults applied when a text operation is called without them."""
    slug_separator: str = "-"
    snake_delimiter: str = "_"
    limit_length: int = 100
    limit_end: str = "..."
    words_count: int = 100
    words_end: str = "..."
    random_length: int = 16


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    text: TextConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def defaults(cls) -> "Config":
        """Build a Config made only of default values."""
        return cls._parse_config({}, Path.cwd())

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                {"path": str(config_path)}
            )

        project_root = config_path.resolve().parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            logs_directory=cls._resolve_path(paths_data.get("logs_directory"), project_root)
        )

        text_data = data.get("text", {})
        text_defaults = TextConfig()
        text = TextConfig(
            slug_separator=text_data.get("slug_separator", text_defaults.slug_separator),
            snake_delimiter=text_data.get("snake_delimiter", text_defaults.snake_delimiter),
            limit_length=text_data.get("limit_length", text_defaults.limit_length),
            limit_end=text_data.get("limit_end", text_defaults.limit_end),
            words_count=text_data.get("words_count", text_defaults.words_count),
            words_end=text_data.get("words_end", text_defaults.words_end),
            random_length=text_data.get("random_length", text_defaults.random_length)
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", DEFAULT_LOG_FORMAT),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        return cls(
            paths=paths,
            text=text,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: Optional[str], project_root: Path) -> Optional[Path]:
        """Resolve a path string, making relative paths absolute."""
        if not path_str:
            return None

        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)


if __name__ == "__main__":
    try:
        config = get_config()
        print(f"Project root: {config.project_root}")
        print(f"Logs directory: {config.paths.logs_directory}")
        print(f"Slug separator: {config.text.slug_separator!r}")
        print(f"Limit: {config.text.limit_length} chars, end {config.text.limit_end!r}")
    except ConfigurationError as e:
        print(f"Config error: {e.message}")
