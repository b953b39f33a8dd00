"""
Process Executor Module

Runs external commands: fork, resolve the command against the search
path, and replace the child's process image with execv.

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Callable, Optional

from wish.exceptions import CommandNotFound, ExecutionFailure, ForkError, ShellException
from wish.logger import get_logger
from .path_resolver import PathResolver, SearchPath
from .tokenizer import parse_command


class ProcessExecutor:
    """
    Executes external commands in child processes.

    ``execute`` only ever runs inside a forked child; ``spawn`` does the
    fork and waits for that specific child.
    """

    def __init__(
        self,
        search_path: SearchPath,
        max_args: int = 10,
        report_error: Optional[Callable[[ShellException], None]] = None
    ):
        """
        Initialize the executor.

        Args:
            search_path: The shell's search path. Shared, not copied, so
                later ``path`` commands are seen here.
            max_args: Argument vector size including its terminator
            report_error: Called in the child before it exits on error
        """
        self._search_path = search_path
        self._max_args = max_args
        self._report_error = report_error
        self._logger = get_logger('executor')

    @property
    def search_path(self) -> SearchPath:
        return self._search_path

    def execute(self, line: str) -> None:
        """
        Replace the current process image with the command in line.

        Does not return on success.

        Raises:
            ArgumentLimitExceeded: Too many arguments
            CommandNotFound: No executable in the search path
            ExecutionFailure: execv itself failed
        """
        command = parse_command(line, self._max_args)

        path = PathResolver.resolve(self._search_path, command.command)
        if path is None:
            raise CommandNotFound(
                command.command,
                context={'search_path': self._search_path.entries}
            )

        self._logger.debug("Executing", context={'path': path, 'argv': command.argv})

        try:
            os.execv(path, command.argv)
        except OSError as e:
            raise ExecutionFailure(path, reason=e.strerror)

    def spawn(self, line: str) -> int:
        """
        Run line as an external command and wait for it.

        Args:
            line: Trimmed command line without redirection or parallel markers

        Returns:
            Exit code of the child

        Raises:
            ForkError: If fork() fails
        """
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            pid = os.fork()
        except OSError as e:
            raise ForkError(e.strerror or "fork failed", parent_pid=os.getpid())

        if pid == 0:
            self._run_child(line)

        _, status = os.waitpid(pid, 0)
        exit_code = os.waitstatus_to_exitcode(status)

        self._logger.debug(
            "Command finished",
            pid=pid,
            context={'line': line, 'exit_code': exit_code}
        )

        return exit_code

    def _run_child(self, line: str) -> None:
        """Body of the forked child. Never returns."""
        try:
            self.execute(line)
        except ShellException as e:
            self._logger.warning(f"Command failed: {e}")
            if self._report_error:
                self._report_error(e)
        except Exception as e:
            self._logger.exception("Unexpected error in child", exc=e)
        finally:
            sys.stdout.flush()
            sys.stderr.flush()
            os._exit(1)
