"""
WISH Shell Module

Provides the command-line shell:
- Tokenizing and trimming
- Search path resolution
- Output redirection
- Parallel execution
- Built-in commands
- External command execution
"""

from .tokenizer import ParsedCommand, split_whitespace, trim, trim_bounds, parse_command
from .path_resolver import PathResolver, SearchPath
from .redirect import StdoutGuard, apply_redirection, extract_target
from .parallel import ParallelExecutor, parallel_exec, split_segments
from .builtins import BuiltinCommands
from .executor import ProcessExecutor
from .shell import Shell

__all__ = [
    'ParsedCommand',
    'split_whitespace',
    'trim',
    'trim_bounds',
    'parse_command',
    'PathResolver',
    'SearchPath',
    'StdoutGuard',
    'apply_redirection',
    'extract_target',
    'ParallelExecutor',
    'parallel_exec',
    'split_segments',
    'BuiltinCommands',
    'ProcessExecutor',
    'Shell',
]
