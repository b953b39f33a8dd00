"""
Parallel Execution Module

Runs ``cmd1 & cmd2 & cmd3`` as concurrent child processes and waits
for all of them before the shell reads another line.

Every child leaves through ``os._exit``. It never returns into the
caller's loop and never reads from the shell's input stream.

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Callable, List, Sequence

from wish.exceptions import ForkError, ParallelLimitExceeded
from wish.logger import get_logger


PARALLEL_SEPARATOR = '&'

_logger = get_logger('parallel')


def split_segments(line: str, separator: str = PARALLEL_SEPARATOR) -> List[str]:
    """
    Split a parallel directive into its command segments.

    A line that does not end with the separator gets `` &`` appended so
    the last command is delimited like the others. The text after the
    final separator is dropped.

    Args:
        line: Command line
        separator: Single-character parallel separator

    Returns:
        Ordered segments, untrimmed. Empty when the separator is absent
        or the line is the bare separator.

    Example:
        >>> split_segments("echo 1 & echo 2")
        ['echo 1 ', ' echo 2 ']
    """
    if separator not in line or line == separator:
        return []

    if not line.endswith(separator):
        line = f"{line} {separator}"

    return line.split(separator)[:-1]


def _flush_std_streams() -> None:
    sys.stdout.flush()
    sys.stderr.flush()


def _run_child(function: Callable[[], None]) -> None:
    """Body of a forked child. Never returns."""
    status = 0
    try:
        function()
    except Exception as e:
        _logger.exception("Parallel child failed", exc=e)
        status = 1
    finally:
        _flush_std_streams()
        os._exit(status)


def spawn(function: Callable[[], None]) -> int:
    """
    Run function in a forked child process.

    Returns:
        The child's pid

    Raises:
        ForkError: If fork() fails
    """
    _flush_std_streams()
    try:
        pid = os.fork()
    except OSError as e:
        raise ForkError(e.strerror or "fork failed", parent_pid=os.getpid())

    if pid == 0:
        _run_child(function)

    return pid


def join(pids: Sequence[int]) -> List[int]:
    """Wait for every pid and return their exit codes in the same order."""
    statuses = []
    for pid in pids:
        _, status = os.waitpid(pid, 0)
        statuses.append(os.waitstatus_to_exitcode(status))
    return statuses


def parallel_exec(functions: Sequence[Callable[[], None]]) -> List[int]:
    """
    Spawn a process for each function and wait for all of them.

    Args:
        functions: Callables to run, one child each

    Returns:
        Exit codes of the children, in spawn order

    Raises:
        ForkError: If a fork fails. Children spawned before the failure
            are waited for first.
    """
    pids: List[int] = []
    try:
        for function in functions:
            pids.append(spawn(function))
    finally:
        statuses = join(pids)

    return statuses


class ParallelExecutor:
    """
    Dispatches each segment of a parallel directive in its own process.

    Example:
        >>> executor = ParallelExecutor(max_children=255)
        >>> executor.run("sleep 1 & sleep 1", shell.dispatch)
        ''
    """

    def __init__(self, max_children: int = 255, separator: str = PARALLEL_SEPARATOR):
        self._max_children = max_children
        self._separator = separator

    @property
    def max_children(self) -> int:
        return self._max_children

    def run(self, line: str, dispatch: Callable[[str], None]) -> str:
        """
        Execute a parallel directive.

        Args:
            line: Command line
            dispatch: Called once per segment inside the child process

        Returns:
            The line unchanged when it has no separator, otherwise an
            empty line: all segments have already run.

        Raises:
            ParallelLimitExceeded: Too many segments; nothing is spawned
            ForkError: A fork failed
        """
        if self._separator not in line:
            return line

        segments = split_segments(line, self._separator)
        if not segments:
            return ""

        if len(segments) > self._max_children:
            raise ParallelLimitExceeded(
                count=len(segments),
                limit=self._max_children
            )

        _logger.debug(
            "Spawning parallel commands",
            context={'count': len(segments)}
        )

        statuses = parallel_exec(
            [self._bind(dispatch, segment) for segment in segments]
        )

        _logger.debug(
            "Parallel commands finished",
            context={'statuses': statuses}
        )

        return ""

    @staticmethod
    def _bind(dispatch: Callable[[str], None], segment: str) -> Callable[[], None]:
        return lambda: dispatch(segment)
