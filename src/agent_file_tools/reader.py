"""
Read-only file tools confined to a root directory.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from agent_file_tools.exceptions import PathTraversalError
from agent_file_tools.paths import (
    PathLike,
    normalize_root,
    require_directory,
    require_file,
    resolve_path,
)
from agent_file_tools.search import GlobFinder
from agent_file_tools.transformers import ContentTransformer, apply_transformers

logger = logging.getLogger(__name__)


class FileReadTools:
    """
    Read files below a root directory.

    All paths are relative to the root. Anything resolving outside of it
    raises PathTraversalError.

    Usage:
        reader = FileReadTools("/tmp/project")

        reader.list_files("src")        # ['d:pkg', 'f:main.py']
        reader.read_file("src/main.py")
        reader.find_files("**/*.py")
    """

    def __init__(
        self,
        root: PathLike,
        file_content_transformers: Iterable[ContentTransformer] = (),
        encoding: str = "utf-8",
    ):
        """
        Initialize the read tools.

        Args:
            root: Root directory all paths are resolved against
            file_content_transformers: Applied in order to content after reading
            encoding: Text encoding used to read files
        """
        self.root = normalize_root(root)
        self.file_content_transformers = list(file_content_transformers)
        self.encoding = encoding
        self._finder = GlobFinder(self.root)

    def resolve_path(self, path: PathLike) -> Path:
        return resolve_path(self.root, path)

    def resolve_and_validate_file(self, path: PathLike) -> Path:
        return require_file(self.root, path)

    def exists(self, path: PathLike = "") -> bool:
        """
        Check whether something exists at a path.

        Without a path, checks the root directory itself.

        Raises:
            PathTraversalError: If the path escapes root
        """
        return self.resolve_path(path).exists()

    def find_files(self, pattern: str, find_highest: bool = False) -> list[str]:
        """
        Find files using glob or regex patterns.

        Args:
            pattern: ``glob:<pattern>``, ``regex:<pattern>`` or a bare glob,
                matched against root-relative paths
            find_highest: If True, only the highest match in each part of the
                tree is returned. For example, find top-level Maven projects
                with ``find_files("**/pom.xml", find_highest=True)``.

        Returns:
            Absolute paths of matching files and directories
        """
        return self._finder.find(pattern, find_highest=find_highest)

    def read_file(self, path: PathLike) -> str:
        """
        Read a file and apply the content transformers.

        Raises:
            PathTraversalError: If the path escapes root
            NotFoundError: If the file doesn't exist
            WrongKindError: If the path is not a regular file
            UnicodeDecodeError: If the file can't be decoded
        """
        resolved_path = self.resolve_and_validate_file(path)
        # newline="" keeps line endings as they are on disk
        with open(resolved_path, "r", encoding=self.encoding, newline="") as f:
            raw_content = f.read()
        content = apply_transformers(raw_content, self.file_content_transformers)

        logger.debug(
            f"Transformed {path} content with {len(self.file_content_transformers)} "
            f"transformers: length went from {len(raw_content):,} to {len(content):,}"
        )
        return content

    def safe_read_file(self, path: PathLike) -> Optional[str]:
        """
        Read a file, returning None if reading or transforming it fails.

        Traversal attempts are still raised.
        """
        try:
            return self.read_file(path)
        except PathTraversalError:
            raise
        except Exception as e:
            logger.warning(f"Failed to read file at {path}: {e}")
            return None

    def list_files(self, path: PathLike = "") -> list[str]:
        """
        List the immediate children of a directory.

        Returns:
            Names prefixed with ``f:`` for files and ``d:`` for directories,
            sorted

        Raises:
            PathTraversalError: If the path escapes root
            NotFoundError: If the directory doesn't exist
            WrongKindError: If the path is not a directory
        """
        directory = require_directory(self.root, path)
        entries = [
            f"{'d' if child.is_dir() else 'f'}:{child.name}"
            for child in directory.iterdir()
        ]
        return sorted(entries)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(root={self.root!r}, "
            f"transformers={len(self.file_content_transformers)})"
        )
