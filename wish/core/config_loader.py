"""
WISH Configuration Loader

Configuration management for the shell:
- JSON configuration file loading
- Default value handling
- Validation of limits and shell settings

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, List

from wish.exceptions import ConfigError


@dataclass
class ShellConfig:
    """Shell behaviour settings."""
    prompt: str = "wish> "
    default_path: List[str] = field(default_factory=lambda: ["/bin"])
    error_message: str = "An error has occurred\n"
    comment_marker: str = "#"
    redirect_sign: str = ">"
    parallel_separator: str = "&"


@dataclass
class LimitsConfig:
    """Upper bounds on search path, argument list and parallel children."""
    max_search_path: int = 100
    max_args: int = 10
    max_parallel: int = 255


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = False


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the shell.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating
    settings, and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('wish.json')
        >>> print(config.shell.prompt)
        wish>
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigError: If the file cannot be loaded or parsed
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                context={"path": config_path}
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file: {e}",
                context={"path": config_path}
            )
        except OSError as e:
            raise ConfigError(
                f"Cannot read configuration file: {e}",
                context={"path": config_path}
            )

        if not isinstance(data, dict):
            raise ConfigError(
                "Configuration root must be a JSON object",
                context={"path": config_path}
            )

        config = self._parse_config(data)
        self._validate(config)

        self._config = config
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        for section in ('shell', 'limits', 'logging'):
            if section in data and not isinstance(data[section], dict):
                raise ConfigError(
                    f"Configuration section '{section}' must be a JSON object",
                    context={"section": section}
                )

        # Parse shell config
        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                prompt=shell_data.get('prompt', config.shell.prompt),
                default_path=shell_data.get('default_path', config.shell.default_path),
                error_message=shell_data.get('error_message', config.shell.error_message),
                comment_marker=shell_data.get('comment_marker', config.shell.comment_marker),
                redirect_sign=shell_data.get('redirect_sign', config.shell.redirect_sign),
                parallel_separator=shell_data.get('parallel_separator', config.shell.parallel_separator),
            )

        # Parse limits config
        if 'limits' in data:
            limits_data = data['limits']
            config.limits = LimitsConfig(
                max_search_path=limits_data.get('max_search_path', config.limits.max_search_path),
                max_args=limits_data.get('max_args', config.limits.max_args),
                max_parallel=limits_data.get('max_parallel', config.limits.max_parallel),
            )

        # Parse logging config
        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
            )

        return config

    @staticmethod
    def _validate(config: Config) -> None:
        """Reject settings the shell cannot work with."""
        for name in ('max_search_path', 'max_args', 'max_parallel'):
            value = getattr(config.limits, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigError(f"limits.{name} must be a positive integer")

        if config.limits.max_args < 2:
            raise ConfigError("limits.max_args must leave room for a command name")

        default_path = config.shell.default_path
        if not isinstance(default_path, list) or not all(isinstance(d, str) for d in default_path):
            raise ConfigError("shell.default_path must be a list of directories")

        if len(default_path) > config.limits.max_search_path:
            raise ConfigError("shell.default_path exceeds limits.max_search_path")

        for name in ('redirect_sign', 'parallel_separator'):
            value = getattr(config.shell, name)
            if not isinstance(value, str) or len(value) != 1 or value == ' ':
                raise ConfigError(f"shell.{name} must be a single non-space character")

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    @property
    def loaded(self) -> bool:
        """Whether a configuration file has been loaded."""
        return self._loaded

    def reset(self) -> Config:
        """Drop any loaded settings and return to the defaults."""
        self._config = Config()
        self._loaded = False
        return self._config


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    loader = ConfigLoader()
    return loader.config
