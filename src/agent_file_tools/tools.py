"""
Combined file tools and the LLM function-calling surface.

Provides a read/write facade sharing one root and one change log, and a
wrapper exposing the operations to LLMs through function calling
(OpenAI function calling format).
"""

import inspect
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

from agent_file_tools.changelog import ChangeSet, FileChangeLog, FileModification
from agent_file_tools.config import FileToolsConfig
from agent_file_tools.exceptions import FileToolsError, PathTraversalError
from agent_file_tools.paths import PathLike
from agent_file_tools.reader import FileReadTools
from agent_file_tools.transformers import ContentTransformer
from agent_file_tools.writer import FileWriteTools

logger = logging.getLogger(__name__)


class FileTools:
    """
    Read and write file tools over a single root directory.

    Delegates reads to a FileReadTools and writes to a FileWriteTools that
    share the root. Use at your own risk: this changes files on the host.

    Usage:
        tools = read_write("/tmp/project")
        tools.create_file("a/b.txt", "hello")
        tools.read_file("a/b.txt")   # 'hello'
        tools.change_set()           # ChangeSet(changes=[...], root='/tmp/project')
    """

    def __init__(
        self,
        root: PathLike,
        file_content_transformers: Iterable[ContentTransformer] = (),
        change_log: Optional[FileChangeLog] = None,
        encoding: str = "utf-8",
    ):
        self.reader = FileReadTools(root, file_content_transformers, encoding=encoding)
        self.writer = FileWriteTools(self.reader.root, change_log, encoding=encoding)

    @classmethod
    def from_config(cls, config: FileToolsConfig) -> "FileTools":
        return cls(
            config.root,
            config.build_transformers(),
            encoding=config.encoding,
        )

    @property
    def root(self) -> str:
        return self.reader.root

    @property
    def file_content_transformers(self) -> list[ContentTransformer]:
        return self.reader.file_content_transformers

    # Read operations

    def resolve_path(self, path: PathLike) -> Path:
        return self.reader.resolve_path(path)

    def exists(self, path: PathLike = "") -> bool:
        return self.reader.exists(path)

    def find_files(self, pattern: str, find_highest: bool = False) -> list[str]:
        return self.reader.find_files(pattern, find_highest=find_highest)

    def read_file(self, path: PathLike) -> str:
        return self.reader.read_file(path)

    def safe_read_file(self, path: PathLike) -> Optional[str]:
        return self.reader.safe_read_file(path)

    def list_files(self, path: PathLike = "") -> list[str]:
        return self.reader.list_files(path)

    # Write operations

    def create_file(self, path: PathLike, content: str, overwrite: bool = False) -> str:
        return self.writer.create_file(path, content, overwrite=overwrite)

    def edit_file(self, path: PathLike, old_content: str, new_content: str) -> str:
        return self.writer.edit_file(path, old_content, new_content)

    def create_directory(self, path: PathLike) -> str:
        return self.writer.create_directory(path)

    def append_file(self, path: PathLike, content: str) -> str:
        return self.writer.append_file(path, content)

    def append_to_file(
        self, path: PathLike, content: str, create_if_not_exists: bool
    ) -> str:
        return self.writer.append_to_file(path, content, create_if_not_exists)

    def delete(self, path: PathLike) -> str:
        return self.writer.delete(path)

    # Change log

    def record_change(self, change: FileModification) -> None:
        self.writer.record_change(change)

    def get_changes(self) -> list[FileModification]:
        return self.writer.get_changes()

    def flush_changes(self) -> None:
        self.writer.flush_changes()

    def change_set(self) -> ChangeSet:
        return self.writer.change_set()

    def __repr__(self) -> str:
        return (
            f"FileTools(root={self.root!r}, "
            f"transformers={len(self.file_content_transformers)}, "
            f"changes={len(self.writer.change_log)})"
        )


def read_only(
    root: PathLike, file_content_transformers: Iterable[ContentTransformer] = ()
) -> FileReadTools:
    """Create read-only file tools for ``root``."""
    return FileReadTools(root, file_content_transformers)


def read_write(
    root: PathLike, file_content_transformers: Iterable[ContentTransformer] = ()
) -> FileTools:
    """Create read/write file tools for ``root`` with a fresh change log."""
    return FileTools(root, file_content_transformers)


def tools_from_config(config: FileToolsConfig) -> Union[FileReadTools, FileTools]:
    """Create read-only or read/write tools as the configuration asks."""
    if config.read_only:
        return FileReadTools(
            config.root, config.build_transformers(), encoding=config.encoding
        )
    return FileTools.from_config(config)


def _function(name: str, description: str, properties: dict, required: list[str]) -> dict:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


_PATH = {"type": "string", "description": "Path relative to the project root"}

READ_TOOL_SCHEMAS = [
    _function(
        "find_files",
        "Find files using glob patterns. Return absolute paths. "
        "Prefix with 'regex:' to use a regular expression instead.",
        {
            "pattern": {
                "type": "string",
                "description": "Glob pattern matched against root-relative paths, e.g. '**/*.py'",
            },
            "find_highest": {
                "type": "boolean",
                "description": "Only return the highest match in each part of the tree (default: false)",
            },
        },
        ["pattern"],
    ),
    _function(
        "read_file",
        "Read a file at the relative path",
        {"path": _PATH},
        ["path"],
    ),
    _function(
        "list_files",
        "List files and directories at a given path. Prefix is f: for file or d: for directory",
        {"path": _PATH},
        ["path"],
    ),
]

WRITE_TOOL_SCHEMAS = [
    _function(
        "create_file",
        "Create a file with the given content. Fails if the file already exists.",
        {
            "path": _PATH,
            "content": {"type": "string", "description": "Content of the new file"},
        },
        ["path", "content"],
    ),
    _function(
        "edit_file",
        "Edit the file at the given location. Replace old_content with new_content. "
        "old_content is typically just a part of the file, e.g. use it to replace "
        "a particular method or to add another method after it.",
        {
            "path": _PATH,
            "old_content": {"type": "string", "description": "Content to replace"},
            "new_content": {"type": "string", "description": "Replacement content"},
        },
        ["path", "old_content", "new_content"],
    ),
    _function(
        "create_directory",
        "Create a directory at the given path",
        {"path": _PATH},
        ["path"],
    ),
    _function(
        "append_file",
        "Append content to an existing file. The file must already exist.",
        {
            "path": _PATH,
            "content": {"type": "string", "description": "Content to append"},
        },
        ["path", "content"],
    ),
    _function(
        "delete",
        "Delete a file at the given path",
        {"path": _PATH},
        ["path"],
    ),
]


class LLMFileTools:
    """
    Expose file tools to LLMs through function calling.

    Write tools are offered only when the wrapped tools can write.

    Usage:
        llm_tools = LLMFileTools(read_write("/tmp/project"))

        # Get tool schemas for LLM
        schemas = llm_tools.get_tool_schemas()

        # Execute tool call
        result = await llm_tools.execute_tool(
            tool_name="read_file",
            arguments={"path": "src/main.py"},
        )
    """

    def __init__(self, tools: Union[FileReadTools, FileWriteTools, FileTools]):
        self.tools = tools
        self.can_read = hasattr(tools, "read_file")
        self.can_write = hasattr(tools, "create_file")

        self._handlers: dict[str, Callable[..., dict[str, Any]]] = {}
        if self.can_read:
            self._handlers.update(
                find_files=self._find_files,
                read_file=self._read_file,
                list_files=self._list_files,
            )
        if self.can_write:
            self._handlers.update(
                create_file=self._create_file,
                edit_file=self._edit_file,
                create_directory=self._create_directory,
                append_file=self._append_file,
                delete=self._delete,
            )

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """
        Get OpenAI function calling schemas for the available tools.

        Returns:
            List of tool schemas in OpenAI format
        """
        schemas = []
        if self.can_read:
            schemas.extend(READ_TOOL_SCHEMAS)
        if self.can_write:
            schemas.extend(WRITE_TOOL_SCHEMAS)
        return schemas

    async def execute_tool(
        self, tool_name: str, arguments: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Execute a tool call from an LLM.

        Failures of the operation are returned as ``{"success": False, ...}``
        so they can be fed back to the model.

        Args:
            tool_name: Name of the tool to execute
            arguments: Tool arguments (from LLM function call)

        Returns:
            Tool execution result as a dict

        Raises:
            ValueError: If tool name is unknown
        """
        handler = self._handlers.get(tool_name)
        if handler is None:
            raise ValueError(f"Unknown tool: {tool_name}")

        try:
            inspect.signature(handler).bind(**arguments)
        except TypeError as e:
            logger.warning(f"LLM {tool_name} called with invalid arguments: {e}")
            return self._error(arguments, f"Invalid arguments: {e}", "InvalidArguments")

        try:
            return {"success": True, **handler(**arguments)}
        except PathTraversalError as e:
            logger.warning(f"LLM {tool_name} rejected: {e}")
            return self._error(arguments, str(e), type(e).__name__)
        except (FileToolsError, OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning(f"LLM {tool_name} failed: {e}")
            return self._error(arguments, str(e), type(e).__name__)
        except Exception as e:
            logger.error(f"LLM {tool_name} unexpected error: {e}")
            return self._error(arguments, f"Unexpected error: {e}", "UnexpectedError")

    @staticmethod
    def _error(arguments: dict[str, Any], message: str, error_type: str) -> dict[str, Any]:
        result: dict[str, Any] = {"success": False, "error": message, "error_type": error_type}
        if "path" in arguments:
            result["path"] = arguments["path"]
        return result

    def _find_files(self, pattern: str, find_highest: bool = False) -> dict[str, Any]:
        files = self.tools.find_files(pattern, find_highest=find_highest)
        return {"pattern": pattern, "files": files, "count": len(files)}

    def _read_file(self, path: str) -> dict[str, Any]:
        content = self.tools.read_file(path)
        return {"path": path, "content": content, "size": len(content)}

    def _list_files(self, path: str = "") -> dict[str, Any]:
        entries = self.tools.list_files(path)
        return {"path": path, "files": entries, "count": len(entries)}

    def _create_file(self, path: str, content: str) -> dict[str, Any]:
        return {"path": path, "message": self.tools.create_file(path, content)}

    def _edit_file(self, path: str, old_content: str, new_content: str) -> dict[str, Any]:
        return {"path": path, "message": self.tools.edit_file(path, old_content, new_content)}

    def _create_directory(self, path: str) -> dict[str, Any]:
        return {"path": path, "message": self.tools.create_directory(path)}

    def _append_file(self, path: str, content: str) -> dict[str, Any]:
        return {"path": path, "message": self.tools.append_file(path, content)}

    def _delete(self, path: str) -> dict[str, Any]:
        return {"path": path, "message": self.tools.delete(path)}
