"""
Agent File Tools - sandboxed file access for LLM agents.

This package lets an autonomous agent read and modify files below a fixed
root directory without being able to escape it, and records what it
changed during a session.
"""

__version__ = "0.1.0"

from agent_file_tools.archive import create_temp_dir, extract_zip_file
from agent_file_tools.changelog import (
    ChangeSet,
    FileChangeLog,
    FileModification,
    FileModificationType,
)
from agent_file_tools.config import FileToolsConfig
from agent_file_tools.exceptions import (
    AlreadyExistsError,
    FileToolsError,
    InvalidPatternError,
    NotFoundError,
    PathTraversalError,
    WrongKindError,
)
from agent_file_tools.paths import require_directory, require_file, resolve_path
from agent_file_tools.reader import FileReadTools
from agent_file_tools.search import GlobFinder, PathPatternMatcher
from agent_file_tools.tools import (
    FileTools,
    LLMFileTools,
    read_only,
    read_write,
    tools_from_config,
)
from agent_file_tools.transformers import (
    ContentTransformer,
    apply_transformers,
    redact_patterns,
    truncate,
)
from agent_file_tools.writer import FileWriteTools

__all__ = [
    # Version
    "__version__",
    # Configuration
    "FileToolsConfig",
    # Exceptions
    "FileToolsError",
    "PathTraversalError",
    "NotFoundError",
    "WrongKindError",
    "AlreadyExistsError",
    "InvalidPatternError",
    # Paths
    "resolve_path",
    "require_file",
    "require_directory",
    # Search
    "GlobFinder",
    "PathPatternMatcher",
    # Change log
    "ChangeSet",
    "FileChangeLog",
    "FileModification",
    "FileModificationType",
    # Transformers
    "ContentTransformer",
    "apply_transformers",
    "redact_patterns",
    "truncate",
    # Tools
    "FileReadTools",
    "FileWriteTools",
    "FileTools",
    "LLMFileTools",
    "read_only",
    "read_write",
    "tools_from_config",
    # Helpers
    "create_temp_dir",
    "extract_zip_file",
]
