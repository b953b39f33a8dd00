"""
Redirection Module

Output redirection for a single command: ``cmd args > target``.

The redirection swaps file descriptor 1 for the whole shell process, so
every caller must hold a StdoutGuard and restore it once the command has
finished, whether or not it succeeded.

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Tuple

from wish.exceptions import MalformedRedirection, RedirectionIOError
from wish.logger import get_logger
from .tokenizer import trim


REDIRECT_SIGN = '>'
TARGET_MODE = 0o600
STDOUT_FILENO = 1

_logger = get_logger('redirect')


def extract_target(line: str, sign: str = REDIRECT_SIGN) -> Tuple[str, bool]:
    """
    Find the text after the first redirection sign.

    Args:
        line: Command line
        sign: Single-character redirection sign

    Returns:
        (target, found). target is untrimmed; ("", False) if the sign
        does not appear.
    """
    index = line.find(sign)
    if index == -1:
        return "", False
    return line[index + 1:], True


def open_target(path: str) -> int:
    """Open path for writing, creating or truncating it with owner-only access."""
    try:
        return os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, TARGET_MODE)
    except OSError as e:
        raise RedirectionIOError(path, reason=e.strerror)


def redirect_stdout_to(fd: int) -> None:
    """Make fd the process's standard output, then close fd itself."""
    sys.stdout.flush()
    if fd == STDOUT_FILENO:
        return
    os.dup2(fd, STDOUT_FILENO)
    os.close(fd)


def apply_redirection(line: str, sign: str = REDIRECT_SIGN) -> str:
    """
    Apply an output redirection found in line.

    Args:
        line: Command line, possibly ending in ``> target``
        sign: Single-character redirection sign

    Returns:
        The line unchanged when there is no redirection, otherwise the
        part of the line before the sign.

    Raises:
        MalformedRedirection: The line starts with the sign, or the
            target contains a space
        RedirectionIOError: The target cannot be opened
    """
    if line.startswith(sign):
        raise MalformedRedirection(line, reason="missing command")

    target, found = extract_target(line, sign)
    target = trim(target)

    if ' ' in target:
        raise MalformedRedirection(line, reason="whitespace in target")

    if not found:
        return line

    fd = open_target(target)
    redirect_stdout_to(fd)
    _logger.debug("Standard output redirected", context={'target': target})

    return line[:line.index(sign)]


class StdoutGuard:
    """
    Saved copy of the shell's standard output.

    Create one before any redirection happens. ``restore()`` puts the
    saved descriptor back on fd 1 and can be called any number of times.

    Example:
        >>> guard = StdoutGuard()
        >>> with guard:
        ...     apply_redirection("ls > listing.txt")
    """

    def __init__(self):
        self._saved_fd = os.dup(STDOUT_FILENO)
        self._closed = False

    @property
    def saved_fd(self) -> int:
        return self._saved_fd

    def restore(self) -> None:
        """Point fd 1 back at the saved standard output."""
        if self._closed:
            return
        sys.stdout.flush()
        os.dup2(self._saved_fd, STDOUT_FILENO)

    def close(self) -> None:
        """Release the saved descriptor."""
        if self._closed:
            return
        os.close(self._saved_fd)
        self._closed = True

    def __enter__(self) -> 'StdoutGuard':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
