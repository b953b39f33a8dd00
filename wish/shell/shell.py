"""
WISH Shell Module

The read-eval loop of the shell.

Each line goes through the same stages in a fixed order:

    comment skip -> parallel split -> redirection -> trim
        -> built-in -> external command

Parallel splitting comes first so that each segment carries its own
redirection. Redirection comes before built-in detection so a ``>``
never leaks into built-in argument parsing.

Author: YSNRFD
Version: 1.0.0
"""

import io
import sys
from typing import Optional, TextIO

from wish.core.config_loader import Config, get_config
from wish.exceptions import ShellException, StreamError, UsageError
from wish.logger import get_logger
from .builtins import BuiltinCommands
from .executor import ProcessExecutor
from .parallel import ParallelExecutor
from .path_resolver import SearchPath
from .redirect import StdoutGuard, apply_redirection
from .tokenizer import trim


# Bytes that are not valid UTF-8 survive as lone surrogates, which
# os.fsencode turns back into the original bytes for exec, open and chdir.
INPUT_ERRORS = 'surrogateescape'


class Shell:
    """
    WISH command interpreter.

    Provides:
    - Interactive mode (prompt before each read) and batch mode
    - Built-in commands: exit, cd, path
    - External commands resolved against the search path
    - Output redirection with ``>``
    - Parallel commands separated by ``&``

    Example:
        >>> shell = Shell()
        >>> shell.run()
    """

    def __init__(
        self,
        batch_file: Optional[str] = None,
        config: Optional[Config] = None,
        stdin: Optional[TextIO] = None
    ):
        """
        Initialize the shell.

        Args:
            batch_file: File to read commands from. Interactive when None.
            config: Configuration, the global one when None
            stdin: Stream read in interactive mode, sys.stdin when None

        Raises:
            StreamError: If the batch file cannot be opened
        """
        self._config = config or get_config()
        self._logger = get_logger('shell')
        self._running = False
        self._exiting = False

        shell_config = self._config.shell
        limits = self._config.limits

        self._prompt = shell_config.prompt
        self._search_path = SearchPath(
            shell_config.default_path,
            max_entries=limits.max_search_path
        )
        self._builtins = BuiltinCommands(self)
        self._executor = ProcessExecutor(
            self._search_path,
            max_args=limits.max_args,
            report_error=self.report_error
        )
        self._parallel = ParallelExecutor(
            max_children=limits.max_parallel,
            separator=shell_config.parallel_separator
        )

        self._batch_file = batch_file
        if batch_file is None:
            self._stream = stdin or self._open_stdin()
            self._owns_stream = False
        else:
            try:
                self._stream = open(
                    batch_file, 'r', encoding='utf-8', errors=INPUT_ERRORS
                )
            except OSError as e:
                raise StreamError(batch_file, reason=e.strerror)
            self._owns_stream = True

        self._stdout_guard = StdoutGuard()

        self._logger.debug(
            "Shell initialized",
            context={
                'mode': 'interactive' if self.interactive else 'batch',
                'search_path': self._search_path.entries,
            }
        )

    @staticmethod
    def _open_stdin() -> TextIO:
        """Standard input, decoding undecodable bytes as surrogates."""
        if isinstance(sys.stdin, io.TextIOWrapper):
            sys.stdin.reconfigure(errors=INPUT_ERRORS)
        return sys.stdin

    @classmethod
    def from_argv(cls, argv: list[str], config: Optional[Config] = None) -> 'Shell':
        """
        Build a shell from command-line arguments (program name excluded).

        Raises:
            UsageError: More than one argument
            StreamError: The batch file cannot be opened
        """
        if len(argv) > 1:
            raise UsageError(argv)
        return cls(batch_file=argv[0] if argv else None, config=config)

    @property
    def interactive(self) -> bool:
        return self._batch_file is None

    @property
    def search_path(self) -> SearchPath:
        return self._search_path

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def executor(self) -> ProcessExecutor:
        return self._executor

    @property
    def exiting(self) -> bool:
        return self._exiting

    def run(self) -> int:
        """
        Run the shell until end of input or ``exit``.

        Returns:
            Exit status for the program
        """
        self._running = True

        while self._running and not self._exiting:
            line = self._read_line()
            if line is None:
                break
            self.execute_line(line)

        self._running = False
        self._logger.debug("Shell terminating")
        return 0

    def _read_line(self) -> Optional[str]:
        """Read the next line without its newline, None at end of input."""
        if self.interactive:
            sys.stdout.write(self._prompt)
            sys.stdout.flush()

        line = self._stream.readline()
        if not line:
            return None

        if line.endswith('\n'):
            line = line[:-1]
        return line

    def execute_line(self, line: str) -> None:
        """
        Execute one input line.

        Args:
            line: Line as read, without its newline
        """
        if line.startswith(self._config.shell.comment_marker):
            return

        try:
            line = self._parallel.run(line, self.dispatch)
        except ShellException as e:
            self.report_error(e)
            return

        self.dispatch(line)

    def dispatch(self, line: str) -> None:
        """
        Run a single command: redirection, then built-in or external.

        Parallel segments are dispatched through here inside their own
        child process. Standard output is restored afterwards no matter
        how the command ended.
        """
        try:
            line = apply_redirection(line, self._config.shell.redirect_sign)
            line = trim(line)

            if not line:
                return

            if self._builtins.handle(line):
                return

            self._executor.spawn(line)

        except ShellException as e:
            self.report_error(e)
        finally:
            self._stdout_guard.restore()

    def report_error(self, error: ShellException) -> None:
        """Print the generic error message and log the details."""
        self._logger.warning(
            f"{type(error).__name__}: {error.message}",
            context={'error_code': error.error_code, **error.context}
        )
        sys.stderr.write(self._config.shell.error_message)
        sys.stderr.flush()

    def run_script(self, script: str) -> int:
        """
        Run a script (multiple commands).

        Args:
            script: Script content, one command per line

        Returns:
            Exit status, as for run()
        """
        for line in script.split('\n'):
            if self._exiting:
                break
            self.execute_line(line)

        return 0

    def request_exit(self) -> None:
        """Request the shell to exit."""
        self._exiting = True

    def close(self) -> None:
        """Release the batch file and the saved standard output."""
        if self._owns_stream:
            self._stream.close()
            self._owns_stream = False
        self._stdout_guard.close()

