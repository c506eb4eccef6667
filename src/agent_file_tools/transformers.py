"""
Content transformers applied to file text after it is read.

A transformer is any ``str -> str`` callable. Transformers run in order and
must leave alone any text a later ``edit_file`` call may need to match.
"""

import re
from typing import Callable, Iterable, Sequence

ContentTransformer = Callable[[str], str]


def apply_transformers(content: str, transformers: Iterable[ContentTransformer]) -> str:
    """Run ``content`` through each transformer in order."""
    for transformer in transformers:
        content = transformer(content)
    return content


def redact_patterns(
    patterns: Sequence[str], replacement: str = "[REDACTED]"
) -> ContentTransformer:
    """
    Build a transformer that replaces regex matches with ``replacement``.

    Useful for hiding secrets such as API tokens from the model. Redacted
    regions can no longer be targeted by edits.
    """
    compiled = [re.compile(p) for p in patterns]

    def redact(content: str) -> str:
        for regex in compiled:
            content = regex.sub(replacement, content)
        return content

    return redact


def truncate(max_chars: int, marker: str = "\n\n...[TRUNCATED]") -> ContentTransformer:
    """Build a transformer that cuts content after ``max_chars`` characters."""
    if max_chars < 0:
        raise ValueError("max_chars must not be negative")

    def cut(content: str) -> str:
        if len(content) <= max_chars:
            return content
        return content[:max_chars] + marker

    return cut
