"""
Tests for the combined file tools and the LLM tool surface.
"""

import tempfile
from pathlib import Path

import pytest

from agent_file_tools import (
    FileModificationType,
    FileReadTools,
    FileTools,
    FileToolsConfig,
    LLMFileTools,
    read_only,
    read_write,
    tools_from_config,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def tools(temp_dir):
    """Create a read/write FileTools instance."""
    return read_write(temp_dir)


@pytest.fixture
def llm_tools(tools):
    """Create a LLMFileTools instance with write access."""
    return LLMFileTools(tools)


class TestFileTools:
    """Test FileTools and the factories."""

    def test_read_write_factory(self, temp_dir):
        """Test that read_write gives full access with a fresh log."""
        tools = read_write(temp_dir)
        assert isinstance(tools, FileTools)
        assert tools.root == str(temp_dir)
        assert tools.get_changes() == []

    def test_read_only_factory(self, temp_dir):
        """Test that read_only has no write operations."""
        (temp_dir / "file.txt").write_text("secret: abc")
        tools = read_only(temp_dir, [lambda s: s.replace("abc", "***")])

        assert isinstance(tools, FileReadTools)
        assert not hasattr(tools, "create_file")
        assert tools.read_file("file.txt") == "secret: ***"

    def test_session_scenario(self, temp_dir, tools):
        """Test a create, edit, delete session keeps one entry per path."""
        tools.create_file("a/b.txt", "hello")
        assert tools.read_file("a/b.txt") == "hello"
        assert tools.list_files("a") == ["f:b.txt"]

        assert tools.edit_file("a/b.txt", "hello", "hello world") == "file edited"
        assert tools.read_file("a/b.txt") == "hello world"

        tools.create_directory("docs")
        assert tools.delete("a/b.txt") == "file deleted"
        assert not tools.exists("a/b.txt")

        changes = tools.get_changes()
        assert [(c.path, c.type) for c in changes] == [
            ("docs", FileModificationType.CREATE_DIRECTORY),
            ("a/b.txt", FileModificationType.DELETE),
        ]

        tools.flush_changes()
        assert tools.change_set().changes == []

    def test_transformers_do_not_affect_edits(self, temp_dir):
        """Test that edits work on raw content, not transformed content."""
        tools = FileTools(temp_dir, [str.upper])
        tools.create_file("file.txt", "hello")

        assert tools.read_file("file.txt") == "HELLO"
        assert tools.edit_file("file.txt", "hello", "bye") == "file edited"
        assert (temp_dir / "file.txt").read_text() == "bye"

    def test_tools_from_config(self, temp_dir):
        """Test building tools from configuration."""
        config = FileToolsConfig(root=temp_dir, read_only=True)
        assert isinstance(tools_from_config(config), FileReadTools)

        config = FileToolsConfig(root=temp_dir)
        assert isinstance(tools_from_config(config), FileTools)


class TestLLMFileTools:
    """Test LLMFileTools."""

    def test_get_tool_schemas(self, llm_tools):
        """Test getting OpenAI function schemas."""
        schemas = llm_tools.get_tool_schemas()
        names = [s["function"]["name"] for s in schemas]

        assert names == [
            "find_files",
            "read_file",
            "list_files",
            "create_file",
            "edit_file",
            "create_directory",
            "append_file",
            "delete",
        ]
        assert all(s["type"] == "function" for s in schemas)
        assert names == llm_tools.tool_names

    def test_read_only_schemas(self, temp_dir):
        """Test that read-only tools only offer read schemas."""
        names = [
            s["function"]["name"]
            for s in LLMFileTools(read_only(temp_dir)).get_tool_schemas()
        ]
        assert names == ["find_files", "read_file", "list_files"]

    @pytest.mark.asyncio
    async def test_create_and_read_file_tool(self, temp_dir, llm_tools):
        """Test create_file and read_file tool execution."""
        result = await llm_tools.execute_tool(
            tool_name="create_file",
            arguments={"path": "src/main.py", "content": "print('hello')"},
        )
        assert result == {"success": True, "path": "src/main.py", "message": "file created"}

        result = await llm_tools.execute_tool(
            tool_name="read_file",
            arguments={"path": "src/main.py"},
        )
        assert result["success"] is True
        assert result["content"] == "print('hello')"

    @pytest.mark.asyncio
    async def test_edit_file_tool_reports_no_changes(self, temp_dir, llm_tools):
        """Test that no-op edits are distinguishable from real ones."""
        (temp_dir / "file.txt").write_text("hello")

        result = await llm_tools.execute_tool(
            tool_name="edit_file",
            arguments={"path": "file.txt", "old_content": "absent", "new_content": "x"},
        )

        assert result["success"] is True
        assert result["message"] == "no changes made"

    @pytest.mark.asyncio
    async def test_traversal_reported_as_failure(self, llm_tools):
        """Test that traversal attempts come back as errors."""
        result = await llm_tools.execute_tool(
            tool_name="read_file",
            arguments={"path": "../../etc/passwd"},
        )

        assert result["success"] is False
        assert result["error_type"] == "PathTraversalError"
        assert result["path"] == "../../etc/passwd"

    @pytest.mark.asyncio
    async def test_create_existing_file_tool(self, temp_dir, llm_tools):
        """Test that create conflicts are reported."""
        (temp_dir / "file.txt").write_text("x")

        result = await llm_tools.execute_tool(
            tool_name="create_file",
            arguments={"path": "file.txt", "content": "y"},
        )

        assert result["success"] is False
        assert result["error_type"] == "AlreadyExistsError"

    @pytest.mark.asyncio
    async def test_list_and_find_tools(self, temp_dir, llm_tools):
        """Test list_files and find_files tool execution."""
        (temp_dir / "pkg").mkdir()
        (temp_dir / "pkg" / "mod.py").write_text("")
        (temp_dir / "setup.cfg").write_text("")

        listed = await llm_tools.execute_tool("list_files", {"path": ""})
        assert listed["files"] == ["d:pkg", "f:setup.cfg"]

        found = await llm_tools.execute_tool("find_files", {"pattern": "**/*.py"})
        assert found["count"] == 1
        assert found["files"] == [str(temp_dir / "pkg" / "mod.py")]

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, llm_tools):
        """Test that malformed tool calls are reported, not raised."""
        result = await llm_tools.execute_tool("read_file", {"file": "x.txt"})

        assert result["success"] is False
        assert result["error_type"] == "InvalidArguments"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, llm_tools):
        """Test that unknown tools raise ValueError."""
        with pytest.raises(ValueError, match="Unknown tool"):
            await llm_tools.execute_tool(
                tool_name="nonexistent_tool",
                arguments={},
            )

    @pytest.mark.asyncio
    async def test_write_tool_unavailable_when_read_only(self, temp_dir):
        """Test that read-only tools do not dispatch writes."""
        llm_tools = LLMFileTools(read_only(temp_dir))

        with pytest.raises(ValueError, match="Unknown tool"):
            await llm_tools.execute_tool("delete", {"path": "x"})

    @pytest.mark.asyncio
    async def test_unexpected_error_reported(self, temp_dir):
        """Test that an unexpected exception comes back as a failure result."""
        (temp_dir / "file.txt").write_text("x")

        def broken(content: str) -> str:
            raise RuntimeError("transformer failed")

        llm_tools = LLMFileTools(FileTools(temp_dir, [broken]))
        result = await llm_tools.execute_tool("read_file", {"path": "file.txt"})

        assert result["success"] is False
        assert result["error_type"] == "UnexpectedError"
        assert result["path"] == "file.txt"

    @pytest.mark.asyncio
    async def test_type_error_inside_operation_is_not_invalid_arguments(self, temp_dir):
        """Test that only signature mismatches count as invalid arguments."""
        (temp_dir / "file.txt").write_text("x")

        def broken(content: str) -> str:
            raise TypeError("bad transformer")

        llm_tools = LLMFileTools(FileTools(temp_dir, [broken]))
        result = await llm_tools.execute_tool("read_file", {"path": "file.txt"})

        assert result["success"] is False
        assert result["error_type"] == "UnexpectedError"

    @pytest.mark.asyncio
    async def test_invalid_arguments_do_not_run_operation(self, temp_dir, llm_tools):
        """Test that extra arguments are rejected before anything is written."""
        result = await llm_tools.execute_tool(
            "create_file", {"path": "a.txt", "content": "x", "mode": "w"}
        )

        assert result["error_type"] == "InvalidArguments"
        assert not (temp_dir / "a.txt").exists()
