"""
Path Resolver Module

Holds the shell's executable search path and resolves bare command
names against it.

Author: YSNRFD
Version: 1.0.0
"""

import os
from typing import Iterable, Iterator, List, Optional

from wish.exceptions import SearchPathLimitExceeded


SEPARATOR = '/'


class SearchPath:
    """
    Ordered list of directories searched for executables.

    The list is replaced as a whole, never appended to. Entries are
    stored without trailing separators; the root directory stays '/'.

    Example:
        >>> search_path = SearchPath(['/bin'], max_entries=100)
        >>> search_path.replace(['/usr/bin/', '/bin'])
        >>> list(search_path)
        ['/usr/bin', '/bin']
    """

    def __init__(self, entries: Iterable[str] = (), max_entries: int = 100):
        self._max_entries = max_entries
        self._entries: List[str] = []
        self.replace(entries)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    @staticmethod
    def normalize(directory: str) -> str:
        """Strip trailing separators, keeping the root directory intact."""
        stripped = directory.rstrip(SEPARATOR)
        return stripped if stripped else SEPARATOR

    def replace(self, directories: Iterable[str]) -> None:
        """
        Replace every entry with the given directories.

        Raises:
            SearchPathLimitExceeded: If more than max_entries directories
                are given. The current entries are left untouched.
        """
        new_entries = [self.normalize(d) for d in directories]

        if len(new_entries) > self._max_entries:
            raise SearchPathLimitExceeded(
                requested=len(new_entries),
                limit=self._max_entries
            )

        self._entries = new_entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SearchPath):
            return self._entries == other._entries
        if isinstance(other, list):
            return self._entries == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"SearchPath({self._entries!r})"


class PathResolver:
    """
    Resolves command names to executables.

    Each directory is tried in order by joining it with the basename;
    the first candidate that is an executable regular file wins.
    """

    @staticmethod
    def candidate(directory: str, basename: str) -> str:
        """Build the full path for basename inside directory."""
        if directory == SEPARATOR:
            return SEPARATOR + basename
        return directory + SEPARATOR + basename

    @staticmethod
    def is_executable(path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

    @staticmethod
    def resolve(search_path: Iterable[str], basename: str) -> Optional[str]:
        """
        Find the first executable named basename.

        Args:
            search_path: Directories to search, in order
            basename: Command name as typed by the user

        Returns:
            Full path of the match, or None if nothing matched
        """
        if not basename:
            return None

        for directory in search_path:
            path = PathResolver.candidate(directory, basename)
            if PathResolver.is_executable(path):
                return path

        return None
