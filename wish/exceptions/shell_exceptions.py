"""
Shell Exceptions

Exceptions raised while starting the shell and while dispatching a line.
Fatal errors stop the shell at startup; recoverable errors are reported
and the loop carries on with the next line.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        recoverable: Whether the loop can continue after the error
        context: Additional context about the error

    Example:
        >>> raise ShellException("Unexpected shell failure", error_code=3000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        recoverable: bool = True,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 3000
        self.recoverable = recoverable
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code}, "
            f"recoverable={self.recoverable})"
        )


class UsageError(ShellException):
    """
    The shell was started with bad arguments.

    Example:
        >>> raise UsageError(["a.txt", "b.txt"])
    """

    def __init__(
        self,
        argv: list[str],
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["argc"] = len(argv)
        super().__init__(
            message="usage: wish [batch-file]",
            error_code=3001,
            recoverable=False,
            context=ctx
        )
        self.argv = list(argv)


class StreamError(ShellException):
    """
    The batch file could not be opened for reading.

    Example:
        >>> raise StreamError("missing.sh", reason="No such file or directory")
    """

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["path"] = path
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Cannot open batch file: {path}",
            error_code=3002,
            recoverable=False,
            context=ctx
        )
        self.path = path
        self.reason = reason


class ConfigError(ShellException):
    """Raised when the configuration file cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_code=3003,
            recoverable=False,
            context=context
        )


class MalformedRedirection(ShellException):
    """
    A redirection could not be parsed.

    Raised when the line starts with the redirection sign or when the
    target path contains whitespace.

    Example:
        >>> raise MalformedRedirection("echo hi > out put.txt", reason="space in target")
    """

    def __init__(
        self,
        line: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["line"] = line
        super().__init__(
            message=f"Malformed redirection: {reason}",
            error_code=3101,
            context=ctx
        )
        self.line = line
        self.reason = reason


class RedirectionIOError(ShellException):
    """The redirection target could not be opened for writing."""

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["path"] = path
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Cannot open redirection target: {path!r}",
            error_code=3102,
            context=ctx
        )
        self.path = path


class BuiltinMisuse(ShellException):
    """
    A built-in command was called with the wrong arguments or failed.

    Example:
        >>> raise BuiltinMisuse("cd", "expected exactly one argument")
    """

    def __init__(
        self,
        command: str,
        reason: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["command"] = command
        super().__init__(
            message=f"{command}: {reason}",
            error_code=error_code or 3201,
            context=ctx
        )
        self.command = command
        self.reason = reason


class SearchPathLimitExceeded(BuiltinMisuse):
    """More directories were given to `path` than the search path can hold."""

    def __init__(
        self,
        requested: int,
        limit: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["requested"] = requested
        ctx["limit"] = limit
        super().__init__(
            command="path",
            reason=f"too many directories ({requested} > {limit})",
            error_code=3202,
            context=ctx
        )
        self.requested = requested
        self.limit = limit


class CommandNotFound(ShellException):
    """
    No executable matching the command name exists in the search path.

    Example:
        >>> raise CommandNotFound("frobnicate")
    """

    def __init__(
        self,
        command: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["command"] = command
        super().__init__(
            message=f"{command}: command not found",
            error_code=3301,
            context=ctx
        )
        self.command = command


class ExecutionFailure(ShellException):
    """The exec call failed after the executable was resolved."""

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["path"] = path
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Cannot execute {path}",
            error_code=3302,
            context=ctx
        )
        self.path = path


class ArgumentLimitExceeded(ShellException):
    """A command line carries more arguments than the executor accepts."""

    def __init__(
        self,
        count: int,
        limit: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["count"] = count
        ctx["limit"] = limit
        super().__init__(
            message=f"Too many arguments ({count} > {limit})",
            error_code=3303,
            context=ctx
        )
        self.count = count
        self.limit = limit


class ParallelLimitExceeded(ShellException):
    """A parallel directive has more segments than the shell will spawn."""

    def __init__(
        self,
        count: int,
        limit: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["count"] = count
        ctx["limit"] = limit
        super().__init__(
            message=f"Too many parallel commands ({count} > {limit})",
            error_code=3401,
            context=ctx
        )
        self.count = count
        self.limit = limit


class ForkError(ShellException):
    """
    Error during the fork() system call.

    Example:
        >>> raise ForkError("Resource temporarily unavailable", parent_pid=1)
    """

    def __init__(
        self,
        message: str,
        parent_pid: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["parent_pid"] = parent_pid
        super().__init__(
            message=message,
            error_code=3402,
            context=ctx
        )
        self.parent_pid = parent_pid
