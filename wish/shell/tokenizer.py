"""
Tokenizer Module

Splits command lines into arguments and trims surrounding spaces.

Only the space character is a delimiter. Adjacent spaces are not
collapsed, so ``"ls  -l"`` yields an empty token between ``ls`` and
``-l``, and that token is passed on unchanged.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from wish.exceptions import ArgumentLimitExceeded


DELIMITER = ' '


@dataclass
class ParsedCommand:
    """A command line split into an argument vector for exec."""
    command: str
    args: List[str] = field(default_factory=list)

    @property
    def argv(self) -> List[str]:
        """Full argument vector, command name first."""
        return [self.command] + self.args


def split_whitespace(line: str) -> List[str]:
    """
    Split a string on single spaces.

    Args:
        line: String to split

    Returns:
        List of tokens, empty tokens included

    Example:
        >>> split_whitespace("echo  hi")
        ['echo', '', 'hi']
    """
    return line.split(DELIMITER)


def trim_bounds(line: str) -> Tuple[int, int]:
    """
    Locate the part of a string left after trimming spaces.

    Returns:
        (offset, length) of the trimmed slice. An all-space string
        yields (len(line), 0).
    """
    start = 0
    end = len(line)

    while start < end and line[start] == DELIMITER:
        start += 1
    while end > start and line[end - 1] == DELIMITER:
        end -= 1

    return start, end - start


def trim(line: str) -> str:
    """Remove leading and trailing spaces."""
    offset, length = trim_bounds(line)
    return line[offset:offset + length]


def parse_command(line: str, max_args: int) -> ParsedCommand:
    """
    Convert a trimmed line into an argument vector.

    Args:
        line: Command line with redirection and parallel markers removed
        max_args: Size of the argument vector including its terminator,
            so at most ``max_args - 1`` tokens are accepted

    Returns:
        ParsedCommand

    Raises:
        ArgumentLimitExceeded: If the line has too many tokens
    """
    tokens = split_whitespace(line)
    limit = max_args - 1

    if len(tokens) > limit:
        raise ArgumentLimitExceeded(count=len(tokens), limit=limit)

    return ParsedCommand(command=tokens[0], args=tokens[1:])
