"""
CLI module for agent-file-tools.

Provides command-line access to the sandboxed file operations, mainly for
inspecting a root directory the way an agent would see it.
"""

from agent_file_tools.cli.main import cli

__all__ = ["cli"]
