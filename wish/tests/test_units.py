#!/usr/bin/env python3
"""
WISH Unit Tests

Tests for the building blocks that do not fork: exceptions, logging,
configuration, tokenizer and search path resolution.

Run with: python -m pytest wish/tests -v
Or: python -m unittest discover wish/tests

Author: YSNRFD
Version: 1.0.0
"""

import json
import logging
import os
import stat
import sys
import tempfile
import unittest
from pathlib import Path


class TestExceptions(unittest.TestCase):
    """Test the exception hierarchy."""

    def test_shell_exception(self):
        """Test ShellException creation and properties."""
        from wish.exceptions import ShellException

        exc = ShellException("Test error", error_code=3999, context={'line': 'ls'})

        self.assertEqual(exc.message, "Test error")
        self.assertEqual(exc.error_code, 3999)
        self.assertTrue(exc.recoverable)
        self.assertIn("3999", str(exc))
        self.assertIn("line=ls", str(exc))

    def test_startup_errors_are_fatal(self):
        """Usage and stream errors cannot be recovered from."""
        from wish.exceptions import UsageError, StreamError, ConfigError

        self.assertFalse(UsageError(['a', 'b']).recoverable)
        self.assertFalse(StreamError('missing.sh').recoverable)
        self.assertFalse(ConfigError('bad').recoverable)
        self.assertEqual(UsageError(['a', 'b']).context['argc'], 2)

    def test_recoverable_errors(self):
        """Errors raised while dispatching a line are recoverable."""
        from wish.exceptions import (
            MalformedRedirection, RedirectionIOError, BuiltinMisuse,
            CommandNotFound, ExecutionFailure, ArgumentLimitExceeded,
            ParallelLimitExceeded, ForkError,
        )

        errors = [
            MalformedRedirection("> x", reason="missing command"),
            RedirectionIOError("/nope/x"),
            BuiltinMisuse("cd", "expected exactly one argument"),
            CommandNotFound("frobnicate"),
            ExecutionFailure("/bin/broken"),
            ArgumentLimitExceeded(count=12, limit=9),
            ParallelLimitExceeded(count=300, limit=255),
            ForkError("Resource temporarily unavailable", parent_pid=1),
        ]
        for error in errors:
            self.assertTrue(error.recoverable, type(error).__name__)

        codes = [error.error_code for error in errors]
        self.assertEqual(len(codes), len(set(codes)))

    def test_search_path_limit_is_builtin_misuse(self):
        """Exceeding the path limit is reported like any built-in misuse."""
        from wish.exceptions import BuiltinMisuse, SearchPathLimitExceeded

        exc = SearchPathLimitExceeded(requested=101, limit=100)

        self.assertIsInstance(exc, BuiltinMisuse)
        self.assertEqual(exc.command, "path")
        self.assertEqual(exc.requested, 101)
        self.assertEqual(exc.limit, 100)


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def tearDown(self):
        from wish.logger import Logger
        Logger.reset()

    def test_logger_singleton(self):
        """Same subsystem gives the same instance."""
        from wish.logger import Logger, get_logger

        log1 = Logger('test1')
        log2 = get_logger('test1')

        self.assertIs(log1, log2)
        self.assertEqual(log1.subsystem, 'test1')
        self.assertIsNot(log1, Logger('test2'))

    def test_log_levels(self):
        """Test log level ordering and parsing."""
        from wish.logger import LogLevel, parse_level

        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertTrue(LogLevel.DEBUG < LogLevel.WARNING)
        self.assertEqual(parse_level('debug'), LogLevel.DEBUG)
        self.assertEqual(parse_level('nonsense'), LogLevel.WARNING)

    def test_file_output(self):
        """Records go to the log file with subsystem, pid and context."""
        from wish.logger import Logger, LogLevel, get_logger

        Logger.reset()
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, 'logs', 'wish.log')
            Logger.initialize(level=LogLevel.DEBUG, log_file=log_file)
            self.assertTrue(Logger.is_initialized())

            get_logger('unit').info("hello", context={'key': 'value'})
            Logger.reset()

            content = Path(log_file).read_text()

        self.assertIn("[unit]", content)
        self.assertIn(f"(pid={os.getpid()})", content)
        self.assertIn("hello", content)
        self.assertIn("{key=value}", content)

    def test_formatter_without_colors(self):
        """Plain formatting when the stream is not a terminal."""
        from wish.logger import LogFormatter

        formatter = LogFormatter(use_colors=True, stream=None)
        record = logging.LogRecord('wish.x', logging.ERROR, __file__, 1, "boom", None, None)
        record.subsystem = 'x'
        record.pid = 7

        text = formatter.format(record)

        self.assertFalse(formatter.use_colors)
        self.assertIn("ERROR", text)
        self.assertIn("[x] (pid=7) boom", text)


class TestConfig(unittest.TestCase):
    """Test the configuration system."""

    def tearDown(self):
        from wish.core.config_loader import ConfigLoader
        ConfigLoader().reset()

    def _write(self, tmp, data):
        path = os.path.join(tmp, 'wish.json')
        with open(path, 'w') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)
        return path

    def test_default_config(self):
        """Test default configuration values."""
        from wish.core.config_loader import Config

        config = Config()

        self.assertEqual(config.shell.prompt, "wish> ")
        self.assertEqual(config.shell.default_path, ["/bin"])
        self.assertEqual(config.shell.error_message, "An error has occurred\n")
        self.assertEqual(config.limits.max_search_path, 100)
        self.assertEqual(config.limits.max_args, 10)
        self.assertEqual(config.limits.max_parallel, 255)
        self.assertEqual(config.logging.level, "WARNING")

    def test_config_loader_singleton(self):
        """The loader is shared and starts from defaults."""
        from wish.core.config_loader import ConfigLoader, get_config

        loader = ConfigLoader()

        self.assertIs(loader, ConfigLoader())
        self.assertFalse(loader.loaded)
        self.assertIs(get_config(), loader.config)

    def test_load_file(self):
        """Values from the file override defaults section by section."""
        from wish.core.config_loader import ConfigLoader, get_config

        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, {
                'shell': {'prompt': '> ', 'default_path': ['/usr/bin', '/bin']},
                'limits': {'max_args': 4},
            })
            config = ConfigLoader().load(path)

        self.assertEqual(config.shell.prompt, '> ')
        self.assertEqual(config.shell.default_path, ['/usr/bin', '/bin'])
        self.assertEqual(config.shell.redirect_sign, '>')
        self.assertEqual(config.limits.max_args, 4)
        self.assertEqual(config.limits.max_parallel, 255)
        self.assertIs(get_config(), config)

    def test_load_errors(self):
        """Missing, malformed and invalid files raise ConfigError."""
        from wish.core.config_loader import ConfigLoader
        from wish.exceptions import ConfigError

        loader = ConfigLoader()

        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError):
                loader.load(os.path.join(tmp, 'missing.json'))
            with self.assertRaises(ConfigError):
                loader.load(self._write(tmp, '{not json'))
            with self.assertRaises(ConfigError):
                loader.load(self._write(tmp, '[1, 2]'))
            with self.assertRaises(ConfigError):
                loader.load(self._write(tmp, {'limits': {'max_args': 0}}))
            with self.assertRaises(ConfigError):
                loader.load(self._write(tmp, {'shell': {'redirect_sign': '>>'}}))
            with self.assertRaises(ConfigError):
                loader.load(self._write(tmp, {'shell': {'default_path': '/bin'}}))

        self.assertFalse(loader.loaded)

    def test_sections_must_be_objects(self):
        """A section that is not a JSON object raises ConfigError."""
        from wish.core.config_loader import ConfigLoader
        from wish.exceptions import ConfigError

        loader = ConfigLoader()

        with tempfile.TemporaryDirectory() as tmp:
            for section, value in [('shell', ['x']), ('limits', 5), ('logging', 'DEBUG')]:
                with self.assertRaises(ConfigError, msg=section):
                    loader.load(self._write(tmp, {section: value}))

        self.assertFalse(loader.loaded)


class TestTokenizer(unittest.TestCase):
    """Test splitting and trimming."""

    def test_split_preserves_empty_tokens(self):
        """Adjacent spaces produce empty tokens."""
        from wish.shell.tokenizer import split_whitespace

        self.assertEqual(split_whitespace("ls -l /tmp"), ['ls', '-l', '/tmp'])
        self.assertEqual(split_whitespace("echo  hi"), ['echo', '', 'hi'])
        self.assertEqual(split_whitespace("ls"), ['ls'])

    def test_trim(self):
        """Only spaces are trimmed, from both ends."""
        from wish.shell.tokenizer import trim, trim_bounds

        self.assertEqual(
            trim("          echo test variable whitespace!           "),
            "echo test variable whitespace!"
        )
        self.assertEqual(trim("a.txt "), "a.txt")
        self.assertEqual(trim("x"), "x")
        self.assertEqual(trim(""), "")
        self.assertEqual(trim_bounds("  ab  "), (2, 2))

    def test_trim_all_spaces(self):
        """An all-space string trims to empty."""
        from wish.shell.tokenizer import trim, trim_bounds

        self.assertEqual(trim("     "), "")
        self.assertEqual(trim_bounds("   "), (3, 0))

    def test_parse_command(self):
        """A line becomes an argument vector."""
        from wish.shell.tokenizer import parse_command

        cmd = parse_command("ls -la /tmp", max_args=10)

        self.assertEqual(cmd.command, 'ls')
        self.assertEqual(cmd.args, ['-la', '/tmp'])
        self.assertEqual(cmd.argv, ['ls', '-la', '/tmp'])

    def test_parse_command_limit(self):
        """One slot is reserved for the terminator."""
        from wish.shell.tokenizer import parse_command
        from wish.exceptions import ArgumentLimitExceeded

        self.assertEqual(len(parse_command("a b c", max_args=4).argv), 3)
        with self.assertRaises(ArgumentLimitExceeded) as ctx:
            parse_command("a b c d", max_args=4)
        self.assertEqual(ctx.exception.limit, 3)
        self.assertEqual(ctx.exception.count, 4)


class TestPathResolver(unittest.TestCase):
    """Test the search path and executable resolution."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.first = root / 'first'
        self.second = root / 'second'
        self.first.mkdir()
        self.second.mkdir()

        self._make(self.second / 'tool', executable=True)
        self._make(self.first / 'tool', executable=False)
        self._make(self.first / 'both', executable=True)
        self._make(self.second / 'both', executable=True)
        (self.first / 'dir').mkdir()

    def tearDown(self):
        self._tmp.cleanup()

    @staticmethod
    def _make(path, executable):
        path.write_text("#!/bin/sh\nexit 0\n")
        mode = stat.S_IRUSR | stat.S_IWUSR
        if executable:
            mode |= stat.S_IXUSR
        path.chmod(mode)

    def test_search_path_normalizes(self):
        """Trailing separators are dropped, root is kept."""
        from wish.shell.path_resolver import SearchPath

        search_path = SearchPath(['/usr/bin/', '/', '/bin//'])

        self.assertEqual(search_path, ['/usr/bin', '/', '/bin'])
        self.assertEqual(len(search_path), 3)

    def test_search_path_replace(self):
        """Replace swaps every entry; clear empties."""
        from wish.shell.path_resolver import SearchPath

        search_path = SearchPath(['/bin'])
        search_path.replace(['/usr/bin', '/sbin'])
        self.assertEqual(search_path.entries, ['/usr/bin', '/sbin'])

        search_path.replace([])
        self.assertFalse(search_path)

    def test_search_path_limit(self):
        """Too many directories are rejected and the old list is kept."""
        from wish.shell.path_resolver import SearchPath
        from wish.exceptions import SearchPathLimitExceeded

        search_path = SearchPath(['/bin'], max_entries=2)

        with self.assertRaises(SearchPathLimitExceeded):
            search_path.replace(['/a', '/b', '/c'])
        self.assertEqual(search_path, ['/bin'])

    def test_resolve_first_executable(self):
        """Non-executable candidates are skipped."""
        from wish.shell.path_resolver import PathResolver

        found = PathResolver.resolve([str(self.first), str(self.second)], 'tool')

        self.assertEqual(found, f"{self.second}/tool")

    def test_resolve_order(self):
        """The first directory wins."""
        from wish.shell.path_resolver import PathResolver

        found = PathResolver.resolve([str(self.second), str(self.first)], 'both')

        self.assertEqual(found, f"{self.second}/both")

    def test_resolve_not_found(self):
        """Empty search path, missing file and directories do not match."""
        from wish.shell.path_resolver import PathResolver, SearchPath

        self.assertIsNone(PathResolver.resolve(SearchPath([]), 'tool'))
        self.assertIsNone(PathResolver.resolve([str(self.first)], 'missing'))
        self.assertIsNone(PathResolver.resolve([str(self.first)], 'dir'))
        self.assertIsNone(PathResolver.resolve([str(self.first)], ''))

    def test_candidate(self):
        """Candidates are directory + separator + basename."""
        from wish.shell.path_resolver import PathResolver

        self.assertEqual(PathResolver.candidate('/bin', 'ls'), '/bin/ls')
        self.assertEqual(PathResolver.candidate('/', 'ls'), '/ls')


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
