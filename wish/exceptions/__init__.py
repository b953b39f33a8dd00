"""
WISH Exception Hierarchy

All shell exceptions inherit from ShellException. Fatal errors end the
shell at startup; everything else is reported with the generic error
message and the loop moves on to the next line.

Architecture:
    ShellException (Base)
    ├── UsageError
    ├── StreamError
    ├── ConfigError
    ├── MalformedRedirection
    ├── RedirectionIOError
    ├── BuiltinMisuse
    │   └── SearchPathLimitExceeded
    ├── CommandNotFound
    ├── ExecutionFailure
    ├── ArgumentLimitExceeded
    ├── ParallelLimitExceeded
    └── ForkError
"""

from .shell_exceptions import (
    ShellException,
    UsageError,
    StreamError,
    ConfigError,
    MalformedRedirection,
    RedirectionIOError,
    BuiltinMisuse,
    SearchPathLimitExceeded,
    CommandNotFound,
    ExecutionFailure,
    ArgumentLimitExceeded,
    ParallelLimitExceeded,
    ForkError,
)

__all__ = [
    "ShellException",
    # Startup errors
    "UsageError",
    "StreamError",
    "ConfigError",
    # Redirection errors
    "MalformedRedirection",
    "RedirectionIOError",
    # Built-in errors
    "BuiltinMisuse",
    "SearchPathLimitExceeded",
    # Execution errors
    "CommandNotFound",
    "ExecutionFailure",
    "ArgumentLimitExceeded",
    "ParallelLimitExceeded",
    "ForkError",
]
