"""
WISH Core Module

Configuration shared by every shell subsystem.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    LimitsConfig,
    LoggingConfig,
    ShellConfig,
    get_config,
)

__all__ = [
    'Config',
    'ConfigLoader',
    'LimitsConfig',
    'LoggingConfig',
    'ShellConfig',
    'get_config',
]
