"""
File modification tools confined to a root directory.

Every modification is recorded in a change log so callers can see what a
session touched.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from agent_file_tools.changelog import (
    ChangeSet,
    FileChangeLog,
    FileModification,
    FileModificationType,
)
from agent_file_tools.exceptions import AlreadyExistsError
from agent_file_tools.paths import PathLike, normalize_root, require_file, resolve_path

logger = logging.getLogger(__name__)

FILE_CREATED = "file created"
FILE_EDITED = "file edited"
NO_CHANGES_MADE = "no changes made"
DIRECTORY_CREATED = "directory created"
DIRECTORY_EXISTS = "directory already exists"
CONTENT_APPENDED = "content appended to file"
FILE_DELETED = "file deleted"


class FileWriteTools:
    """
    Create, edit, append to and delete files below a root directory.

    Mutating operations return a short outcome string. Operations that turn
    out to be no-ops ("no changes made", "directory already exists") do not
    record a change.

    Usage:
        writer = FileWriteTools("/tmp/project")

        writer.create_file("a/b.txt", "hello")              # 'file created'
        writer.edit_file("a/b.txt", "hello", "hello world")  # 'file edited'
        writer.get_changes()  # [FileModification(path='a/b.txt', type=EDIT)]
    """

    def __init__(
        self,
        root: PathLike,
        change_log: Optional[FileChangeLog] = None,
        encoding: str = "utf-8",
    ):
        """
        Initialize the write tools.

        Args:
            root: Root directory all paths are resolved against
            change_log: Log to record modifications in (a new one by default)
            encoding: Text encoding used to read and write files
        """
        self.root = normalize_root(root)
        self.change_log = change_log if change_log is not None else FileChangeLog()
        self.encoding = encoding

    # Change log

    def record_change(self, change: FileModification) -> None:
        self.change_log.record_change(change)

    def get_changes(self) -> list[FileModification]:
        return self.change_log.get_changes()

    def flush_changes(self) -> None:
        self.change_log.flush_changes()

    def change_set(self) -> ChangeSet:
        """Snapshot of this session's changes together with the root."""
        return ChangeSet(changes=self.get_changes(), root=self.root)

    def _record(self, path: PathLike, change_type: FileModificationType) -> None:
        self.record_change(FileModification(path=os.fspath(path), type=change_type))

    # Operations

    def create_file(self, path: PathLike, content: str, overwrite: bool = False) -> str:
        """
        Create a file with the given content.

        Parent directories are created as needed.

        Args:
            path: Path relative to root
            content: File content
            overwrite: Replace an existing file instead of failing

        Raises:
            PathTraversalError: If the path escapes root
            AlreadyExistsError: If the file exists and overwrite is False
        """
        resolved_path = resolve_path(self.root, path)
        if resolved_path.exists() and not overwrite:
            logger.warning(f"File already exists at {path}")
            raise AlreadyExistsError(os.fspath(path))

        resolved_path.parent.mkdir(parents=True, exist_ok=True)
        self._write(resolved_path, content)
        logger.info(f"Created file at {path} ({len(content):,} chars)")
        self._record(path, FileModificationType.CREATE)
        return FILE_CREATED

    def edit_file(self, path: PathLike, old_content: str, new_content: str) -> str:
        """
        Replace ``old_content`` with ``new_content`` in a file.

        Every occurrence is replaced. ``old_content`` is usually a fragment of
        the file, such as one method, and should carry enough context to
        identify the intended region.

        Returns:
            "file edited", or "no changes made" if ``old_content`` was not found

        Raises:
            PathTraversalError: If the path escapes root
            NotFoundError: If the file doesn't exist
            WrongKindError: If the path is not a regular file
            ValueError: If old_content is empty
        """
        logger.info(f"Editing file at {path}")
        logger.debug(f"File edit at {path}: {old_content!r} -> {new_content!r}")
        resolved_path = require_file(self.root, path)
        if not old_content:
            raise ValueError("old_content must not be empty")

        old_file_content = self._read(resolved_path)
        new_file_content = old_file_content.replace(old_content, new_content)

        if new_file_content == old_file_content:
            logger.warning(
                f"edit_file on {resolved_path} produced no changes: "
                f"old_content={old_content!r}, new_content={new_content!r}"
            )
            return NO_CHANGES_MADE

        self._write(resolved_path, new_file_content)
        logger.info(f"Edited file at {path}")
        self._record(path, FileModificationType.EDIT)
        return FILE_EDITED

    def create_directory(self, path: PathLike) -> str:
        """
        Create a directory, including missing parents.

        Returns:
            "directory created", or "directory already exists"

        Raises:
            PathTraversalError: If the path escapes root
            AlreadyExistsError: If a non-directory exists at the path
        """
        resolved_path = resolve_path(self.root, path)
        if resolved_path.exists():
            if resolved_path.is_dir():
                return DIRECTORY_EXISTS
            raise AlreadyExistsError(
                os.fspath(path), "A file already exists at this path"
            )

        resolved_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created directory at {path}")
        self._record(path, FileModificationType.CREATE_DIRECTORY)
        return DIRECTORY_CREATED

    def append_file(self, path: PathLike, content: str) -> str:
        """
        Append content to an existing file.

        Raises:
            PathTraversalError: If the path escapes root
            NotFoundError: If the file doesn't exist
            WrongKindError: If the path is not a regular file
        """
        resolved_path = require_file(self.root, path)
        with open(resolved_path, "a", encoding=self.encoding, newline="") as f:
            f.write(content)
        logger.info(f"Appended content to file at {path}")
        self._record(path, FileModificationType.APPEND)
        return CONTENT_APPENDED

    def append_to_file(
        self, path: PathLike, content: str, create_if_not_exists: bool
    ) -> str:
        """
        Append content to a file, optionally creating it first.

        With ``create_if_not_exists`` a missing file is created with
        ``content``; an existing one is appended to. Without it this is
        ``append_file``.
        """
        if create_if_not_exists:
            try:
                return self.create_file(path, content, overwrite=False)
            except AlreadyExistsError as e:
                if e.path != os.fspath(path):
                    raise
        return self.append_file(path, content)

    def delete(self, path: PathLike) -> str:
        """
        Delete a file.

        Raises:
            PathTraversalError: If the path escapes root
            NotFoundError: If the file doesn't exist
            WrongKindError: If the path is not a regular file
        """
        resolved_path = require_file(self.root, path)
        resolved_path.unlink()
        logger.info(f"Deleted file at {path}")
        self._record(path, FileModificationType.DELETE)
        return FILE_DELETED

    def _read(self, path: Path) -> str:
        with open(path, "r", encoding=self.encoding, newline="") as f:
            return f.read()

    def _write(self, path: Path, content: str) -> None:
        with open(path, "w", encoding=self.encoding, newline="") as f:
            f.write(content)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={self.root!r}, changes={len(self.change_log)})"
