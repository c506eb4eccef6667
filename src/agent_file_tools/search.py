"""
Glob and regex file discovery below a root directory.
"""

import logging
import os
import re
from collections import deque
from pathlib import Path

from agent_file_tools.exceptions import InvalidPatternError
from agent_file_tools.paths import PathLike, normalize_root

logger = logging.getLogger(__name__)

GLOB_PREFIX = "glob:"
REGEX_PREFIX = "regex:"


def glob_to_regex(glob: str) -> str:
    """
    Translate a path glob into a regular expression.

    ``*`` stays within one path segment, ``**`` crosses segments, ``?`` is a
    single non-separator character, ``[...]`` is a character class (``[!...]``
    negates) and ``{a,b}`` is an alternation group.

    Raises:
        InvalidPatternError: If a class or group is left open
    """
    parts = []
    in_group = False
    i, n = 0, len(glob)

    while i < n:
        c = glob[i]
        i += 1

        if c == "*":
            if i < n and glob[i] == "*":
                parts.append(".*")
                i += 1
            else:
                parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "[":
            j = i
            if j < n and glob[j] == "!":
                j += 1
            if j < n and glob[j] == "]":
                j += 1
            while j < n and glob[j] != "]":
                j += 1
            if j >= n:
                raise InvalidPatternError(glob, "Missing ']' in glob")
            stuff = glob[i:j].replace("\\", "\\\\")
            if stuff.startswith("!"):
                stuff = "^" + stuff[1:]
            elif stuff.startswith("^"):
                stuff = "\\" + stuff
            parts.append(f"[{stuff}]")
            i = j + 1
        elif c == "{":
            if in_group:
                raise InvalidPatternError(glob, "Nested groups are not supported")
            parts.append("(?:")
            in_group = True
        elif c == "}" and in_group:
            parts.append(")")
            in_group = False
        elif c == "," and in_group:
            parts.append("|")
        elif c == "\\":
            if i >= n:
                raise InvalidPatternError(glob, "Trailing escape in glob")
            parts.append(re.escape(glob[i]))
            i += 1
        else:
            parts.append(re.escape(c))

    if in_group:
        raise InvalidPatternError(glob, "Missing '}' in glob")

    return "".join(parts)


class PathPatternMatcher:
    """
    Match root-relative paths against a ``glob:`` or ``regex:`` pattern.

    A pattern without a prefix is treated as a glob. The whole relative
    path (``/``-separated) must match.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern

        if pattern.startswith(REGEX_PREFIX):
            self.syntax = "regex"
            expression = pattern[len(REGEX_PREFIX):]
        else:
            self.syntax = "glob"
            body = pattern[len(GLOB_PREFIX):] if pattern.startswith(GLOB_PREFIX) else pattern
            expression = glob_to_regex(body)

        try:
            self._regex = re.compile(expression)
        except re.error as e:
            raise InvalidPatternError(pattern, f"Invalid {self.syntax} pattern ({e})")

    def matches(self, relative_path: str) -> bool:
        return self._regex.fullmatch(relative_path) is not None

    def __repr__(self) -> str:
        return f"PathPatternMatcher({self.pattern!r})"


class GlobFinder:
    """
    Find files and directories below a root by pattern.

    Usage:
        finder = GlobFinder("/tmp/project")

        # Every pom.xml anywhere below the root
        finder.find("**/pom.xml")

        # Only top-level projects: nested pom.xml files are skipped
        finder.find("**/pom.xml", find_highest=True)
    """

    def __init__(self, root: PathLike):
        self.root = normalize_root(root)

    def find(self, pattern: str, find_highest: bool = False) -> list[str]:
        """
        Find paths whose root-relative path matches a pattern.

        Args:
            pattern: ``glob:<pattern>``, ``regex:<pattern>`` or a bare glob
            find_highest: Only return the shallowest match of each subtree

        Returns:
            Absolute paths of matching files and directories

        Raises:
            InvalidPatternError: If the pattern cannot be compiled
        """
        matcher = PathPatternMatcher(pattern)
        if find_highest:
            results = self._find_highest(matcher)
        else:
            results = self._find_all(matcher)
        logger.debug(
            f"find {pattern!r} (highest={find_highest}) under {self.root}: "
            f"{len(results)} matches"
        )
        return results

    def relative(self, path: str) -> str:
        """Return ``path`` relative to the root with ``/`` separators."""
        return Path(os.path.relpath(path, self.root)).as_posix()

    def _find_all(self, matcher: PathPatternMatcher) -> list[str]:
        results = []

        def on_error(error: OSError) -> None:
            logger.debug(f"Skipping unreadable directory {error.filename}: {error}")

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=on_error):
            dirnames.sort()
            for name in sorted(dirnames + filenames):
                full_path = os.path.join(dirpath, name)
                if matcher.matches(self.relative(full_path)):
                    results.append(full_path)

        return results

    def _find_highest(self, matcher: PathPatternMatcher) -> list[str]:
        # Breadth first, so shallow matches are excluded before their
        # descendants are reached.
        results = []
        excluded: set[str] = set()
        queue = deque([self.root])

        while queue:
            directory = queue.popleft()
            if self._is_excluded(directory, excluded):
                continue

            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda entry: entry.name)
            except OSError as e:
                logger.debug(f"Skipping unreadable directory {directory}: {e}")
                continue

            for entry in entries:
                is_dir = entry.is_dir(follow_symlinks=False)
                if matcher.matches(self.relative(entry.path)):
                    results.append(entry.path)
                    excluded.add(entry.path if is_dir else directory)
                elif is_dir:
                    queue.append(entry.path)

        return results

    @staticmethod
    def _is_excluded(path: str, excluded: set[str]) -> bool:
        return any(
            path.startswith(prefix.rstrip(os.sep) + os.sep) for prefix in excluded
        )
