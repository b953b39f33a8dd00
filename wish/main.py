#!/usr/bin/env python3
"""
WISH - a small Unix shell

This is the main entry point for WISH.

Usage:
    wish               interactive mode, prompt before every command
    wish batch-file    run the commands in batch-file, no prompt

Set WISH_CONFIG to the path of a JSON configuration file to override
the defaults (prompt, default search path, limits, logging).

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Optional

from wish.core.config_loader import Config, ConfigLoader
from wish.exceptions import ShellException
from wish.logger import Logger, get_logger, parse_level
from wish.shell.shell import Shell


CONFIG_ENV_VAR = 'WISH_CONFIG'
DEFAULT_ERROR_MESSAGE = "An error has occurred\n"


def load_config() -> Config:
    """
    Load configuration.

    Uses the file named by WISH_CONFIG when set, built-in defaults
    otherwise.

    Raises:
        ConfigError: If WISH_CONFIG names an unreadable or invalid file
    """
    loader = ConfigLoader()
    config_path = os.environ.get(CONFIG_ENV_VAR)

    if config_path:
        return loader.load(config_path)

    return loader.config


def init_logging(config: Config) -> None:
    """Initialize the logging system from configuration."""
    Logger.initialize(
        level=parse_level(config.logging.level),
        log_file=config.logging.log_file,
        console_output=config.logging.console_output
    )


def fatal(error: ShellException, message: str = DEFAULT_ERROR_MESSAGE) -> int:
    """Report a startup failure and return the exit status."""
    get_logger('main').critical(str(error), context={'error_code': error.error_code})
    sys.stderr.write(message)
    sys.stderr.flush()
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for WISH.

    Startup sequence:
    1. Load configuration
    2. Initialize logging
    3. Select interactive or batch mode
    4. Run the loop until end of input or exit

    Args:
        argv: Arguments without the program name, sys.argv[1:] when None

    Returns:
        Exit status
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = load_config()
    except ShellException as e:
        return fatal(e)

    init_logging(config)

    try:
        shell = Shell.from_argv(argv, config=config)
    except ShellException as e:
        return fatal(e, config.shell.error_message)

    try:
        return shell.run()
    finally:
        shell.close()


if __name__ == '__main__':
    sys.exit(main())
