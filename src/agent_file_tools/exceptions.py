"""
Exceptions for sandboxed file operations.
"""

from typing import Optional


class FileToolsError(Exception):
    """Base exception for sandboxed file operations."""

    def __init__(self, path: str, reason: str = "File operation failed"):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class PathTraversalError(FileToolsError):
    """Raised when a path resolves outside the root directory."""

    def __init__(self, path: str, root: str, resolved: Optional[str] = None):
        self.root = root
        self.resolved = resolved
        super().__init__(path, "Path traversal attempt detected")

    def __str__(self) -> str:
        parts = [super().__str__(), f"root={self.root}"]
        if self.resolved is not None:
            parts.append(f"resolved={self.resolved}")
        return ", ".join(parts)


class NotFoundError(FileToolsError):
    """Raised when a file or directory does not exist."""

    pass


class WrongKindError(FileToolsError):
    """Raised when a path exists but is not the expected kind."""

    pass


class AlreadyExistsError(FileToolsError):
    """Raised when creating something that already exists."""

    def __init__(self, path: str, reason: str = "File already exists"):
        super().__init__(path, reason)


class InvalidPatternError(FileToolsError):
    """Raised when a glob or regex pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str = "Invalid pattern"):
        self.pattern = pattern
        super().__init__(pattern, reason)
