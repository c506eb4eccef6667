"""
Root-anchored path resolution.

Every path handed to the file tools is relative to a fixed root directory.
Paths are joined onto the root first and normalized afterwards, and the
result is accepted only if it is the root or lies below it.
"""

import logging
import os
from pathlib import Path
from typing import Union

from agent_file_tools.exceptions import (
    NotFoundError,
    PathTraversalError,
    WrongKindError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def normalize_root(root: PathLike) -> str:
    """Return the root as an absolute, normalized path string."""
    return os.path.normpath(os.path.abspath(os.fspath(root)))


def is_within(path: str, base: str) -> bool:
    """Check that ``path`` equals ``base`` or is a descendant of it."""
    if path == base:
        return True
    prefix = base if base.endswith(os.sep) else base + os.sep
    return path.startswith(prefix)


def resolve_path(root: PathLike, path: PathLike) -> Path:
    """
    Resolve a root-relative path.

    Symbolic links are not followed; the check works on the lexical path.

    Args:
        root: Root directory all paths must stay within
        path: Path relative to root ("" means the root itself)

    Returns:
        Absolute, normalized path inside root

    Raises:
        PathTraversalError: If the normalized path escapes root
    """
    base = normalize_root(root)
    candidate = os.fspath(path)
    resolved = os.path.normpath(os.path.join(base, candidate))

    if not is_within(resolved, base):
        logger.warning(f"Path traversal attempt: {candidate!r} resolved to {resolved}")
        raise PathTraversalError(candidate, base, resolved)

    return Path(resolved)


def require_file(root: PathLike, path: PathLike) -> Path:
    """
    Resolve a path and check that it is an existing regular file.

    Raises:
        PathTraversalError: If the path escapes root
        NotFoundError: If nothing exists at the path
        WrongKindError: If the path is not a regular file
    """
    resolved = resolve_path(root, path)
    if not resolved.exists():
        raise NotFoundError(os.fspath(path), "File does not exist")
    if not resolved.is_file():
        raise WrongKindError(os.fspath(path), "Path is not a regular file")
    return resolved


def require_directory(root: PathLike, path: PathLike) -> Path:
    """
    Resolve a path and check that it is an existing directory.

    Raises:
        PathTraversalError: If the path escapes root
        NotFoundError: If nothing exists at the path
        WrongKindError: If the path is not a directory
    """
    resolved = resolve_path(root, path)
    if not resolved.exists():
        raise NotFoundError(os.fspath(path), "Directory does not exist")
    if not resolved.is_dir():
        raise WrongKindError(os.fspath(path), "Path is not a directory")
    return resolved
