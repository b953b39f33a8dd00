"""
Shell Built-in Commands

Implements the commands the shell runs itself: path, cd and exit.

Author: YSNRFD
Version: 1.0.0
"""

import os
from typing import Callable, List, Tuple

from wish.exceptions import BuiltinMisuse
from wish.logger import get_logger
from .tokenizer import split_whitespace


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands are executed directly by the shell without creating
    a new process. Commands are matched by prefix, in a fixed order, and
    the first match handles the line.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._logger = get_logger('builtins')
        self._commands: List[Tuple[str, Callable[[str], None]]] = [
            ('path', self.cmd_path),
            ('cd', self.cmd_cd),
            ('exit', self.cmd_exit),
        ]

    def get_commands(self) -> List[str]:
        """Get the built-in command names in matching order."""
        return [name for name, _ in self._commands]

    def is_builtin(self, line: str) -> bool:
        """Check if a line is handled by a built-in."""
        return any(line.startswith(name) for name, _ in self._commands)

    def handle(self, line: str) -> bool:
        """
        Execute line if it is a built-in command.

        Args:
            line: Trimmed command line

        Returns:
            True if a built-in handled the line, False otherwise

        Raises:
            BuiltinMisuse: The built-in matched but was misused
        """
        for name, cmd in self._commands:
            if line.startswith(name):
                self._logger.debug("Running built-in", context={'line': line})
                cmd(line)
                return True
        return False

    # Command implementations

    def cmd_path(self, line: str) -> None:
        """Replace the search path with the given directories."""
        directories = [d for d in split_whitespace(line)[1:] if d]
        self._shell.search_path.replace(directories)
        self._logger.info(
            "Search path replaced",
            context={'search_path': self._shell.search_path.entries}
        )

    def cmd_cd(self, line: str) -> None:
        """Change directory. Takes exactly one argument."""
        tokens = split_whitespace(line)
        if len(tokens) != 2:
            raise BuiltinMisuse('cd', "expected exactly one argument")

        try:
            os.chdir(tokens[1])
        except OSError as e:
            raise BuiltinMisuse('cd', f"{tokens[1]}: {e.strerror}")

        self._logger.debug("Changed directory", context={'cwd': os.getcwd()})

    def cmd_exit(self, line: str) -> None:
        """Exit the shell. Takes no arguments."""
        if line != 'exit':
            raise BuiltinMisuse('exit', "takes no arguments")
        self._shell.request_exit()
