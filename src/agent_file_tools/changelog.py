"""
Session-scoped record of file modifications.

The change log keeps one entry per path, reflecting the most recent kind of
modification made through the write tools in the current session.
"""

import logging
import threading
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class FileModificationType(str, Enum):
    """Kind of modification made to a path."""

    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    APPEND = "append"
    CREATE_DIRECTORY = "create_directory"


class FileModification(BaseModel):
    """A modification of one path, relative to the tools' root."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Path relative to root, as given by the caller")
    type: FileModificationType = Field(description="Kind of modification")

    def __str__(self) -> str:
        return f"{self.type.value}: {self.path}"


class ChangeSet(BaseModel):
    """Snapshot of the changes made below a root during a session."""

    model_config = ConfigDict(frozen=True)

    changes: list[FileModification] = Field(default_factory=list)
    root: str = Field(description="Root directory the paths are relative to")

    @property
    def paths(self) -> list[str]:
        return [change.path for change in self.changes]

    def __len__(self) -> int:
        return len(self.changes)


class FileChangeLog:
    """
    In-memory change log that collapses repeated changes to the same path.

    Recording a change for a path that is not logged yet appends it.
    Recording the same kind of change again is a no-op and keeps the entry
    in place. Recording a different kind replaces the entry and moves it to
    the end.

    Usage:
        log = FileChangeLog()
        log.record_change(FileModification(path="a.txt", type=FileModificationType.CREATE))
        log.record_change(FileModification(path="a.txt", type=FileModificationType.EDIT))
        log.get_changes()  # [FileModification(path='a.txt', type=EDIT)]
    """

    def __init__(self, changes: Optional[list[FileModification]] = None):
        self._changes: list[FileModification] = []
        self._lock = threading.Lock()
        for change in changes or []:
            self.record_change(change)

    def record_change(self, change: FileModification) -> None:
        with self._lock:
            existing = next(
                (c for c in self._changes if c.path == change.path), None
            )
            if existing is None:
                self._changes.append(change)
            elif existing.type == change.type:
                logger.debug(f"Change already recorded: {change}")
                return
            else:
                self._changes.remove(existing)
                self._changes.append(change)
        logger.debug(f"Recorded file change: {change}")

    def get_changes(self) -> list[FileModification]:
        """Return a copy of the recorded changes in insertion order."""
        with self._lock:
            return list(self._changes)

    def flush_changes(self) -> None:
        with self._lock:
            self._changes.clear()
        logger.debug("Flushed file changes")

    def __len__(self) -> int:
        with self._lock:
            return len(self._changes)

    def __repr__(self) -> str:
        return f"FileChangeLog(changes={len(self)})"
