"""
WISH - a small Unix shell

Reads commands interactively or from a batch file, runs built-ins
(exit, cd, path) and external programs found on its search path,
redirects standard output with ``>`` and runs ``&``-separated commands
in parallel.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

# Import main components for convenience
from .shell.shell import Shell
from .main import main

__all__ = [
    'Shell',
    'main',
]
