"""
Configuration for sandboxed file tools.
"""

import json
import re
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from agent_file_tools.paths import normalize_root
from agent_file_tools.transformers import ContentTransformer, truncate
from agent_file_tools.transformers import redact_patterns as build_redactor


class FileToolsConfig(BaseSettings):
    """
    Configuration for a file tools instance.

    Values can be passed directly, loaded from a YAML/JSON file, or taken
    from environment variables prefixed with ``AGENT_FILE_TOOLS_``
    (e.g. ``AGENT_FILE_TOOLS_ROOT=/tmp/project``).

    Example:
        ```python
        config = FileToolsConfig.from_file("~/.agent-file-tools.yaml")
        tools = FileTools.from_config(config)
        ```
    """

    model_config = SettingsConfigDict(env_prefix="AGENT_FILE_TOOLS_", extra="forbid")

    root: Path = Field(
        default=Path("."),
        validate_default=True,
        description="Root directory all operations are confined to",
    )

    encoding: str = Field(
        default="utf-8",
        description="Text encoding for reading and writing files",
    )

    read_only: bool = Field(
        default=False,
        description="Expose only read operations",
    )

    redact_patterns: list[str] = Field(
        default_factory=list,
        description="Regex patterns replaced with [REDACTED] in read content",
    )

    max_read_chars: Optional[int] = Field(
        default=None,
        ge=0,
        description="Truncate read content after this many characters (None = no limit)",
    )

    @field_validator("root", mode="before")
    @classmethod
    def normalize_root_path(cls, v):
        """Make the root absolute and normalized (symlinks are kept)."""
        return Path(normalize_root(Path(v).expanduser()))

    @field_validator("redact_patterns")
    @classmethod
    def check_patterns(cls, v: list[str]) -> list[str]:
        """Fail early on patterns that do not compile."""
        try:
            build_redactor(v)
        except re.error as e:
            raise ValueError(f"Invalid redact pattern: {e}")
        return v

    def build_transformers(self) -> list[ContentTransformer]:
        """Content transformers described by this configuration, in order."""
        transformers: list[ContentTransformer] = []
        if self.redact_patterns:
            transformers.append(build_redactor(self.redact_patterns))
        if self.max_read_chars is not None:
            transformers.append(truncate(self.max_read_chars))
        return transformers

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FileToolsConfig":
        """
        Load configuration from a YAML or JSON file.

        File format (YAML):
            ```yaml
            root: /tmp/project
            encoding: utf-8
            read_only: false
            redact_patterns:
              - "sk-[A-Za-z0-9]{20,}"
            max_read_chars: 200000
            ```

        Raises:
            FileNotFoundError: If the config file doesn't exist
        """
        path = Path(path).expanduser().resolve()

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text()

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif path.suffix == ".json":
            data = json.loads(content)
        else:
            # Try YAML first, then JSON
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> "FileToolsConfig":
        return cls(**data)

    def __repr__(self) -> str:
        return (
            f"FileToolsConfig(root={str(self.root)!r}, "
            f"read_only={self.read_only}, "
            f"redactions={len(self.redact_patterns)})"
        )
