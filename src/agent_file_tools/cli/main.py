"""
CLI for agent-file-tools.

Runs the same sandboxed operations an agent gets, against a root directory
given on the command line, in a config file or in AGENT_FILE_TOOLS_ROOT.
"""

import json
import logging
import sys
from typing import Optional, Union

import click
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from agent_file_tools.config import FileToolsConfig
from agent_file_tools.exceptions import FileToolsError
from agent_file_tools.reader import FileReadTools
from agent_file_tools.tools import FileTools, LLMFileTools, tools_from_config

# Load environment variables
load_dotenv()

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Setup rich logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def _fail(message: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    sys.exit(1)


def _tools(ctx: click.Context) -> Union[FileReadTools, FileTools]:
    return ctx.obj["tools"]


def _writable(ctx: click.Context) -> FileTools:
    tools = _tools(ctx)
    if not isinstance(tools, FileTools):
        _fail("Write operations are disabled (read_only is set)")
    return tools


def _run(operation, *args, **kwargs):
    try:
        return operation(*args, **kwargs)
    except (FileToolsError, OSError, UnicodeDecodeError, ValueError) as e:
        _fail(str(e))


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--root",
    "-r",
    type=click.Path(file_okay=False),
    default=None,
    help="Root directory (default: AGENT_FILE_TOOLS_ROOT or current directory)",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a YAML or JSON config file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.pass_context
def cli(ctx: click.Context, root: Optional[str], config: Optional[str], verbose: bool):
    """Agent File Tools - sandboxed file access below a root directory."""
    setup_logging(verbose)

    try:
        if config is not None:
            tools_config = FileToolsConfig.from_file(config)
            if root is not None:
                tools_config = tools_config.model_copy(
                    update={"root": FileToolsConfig(root=root).root}
                )
        elif root is not None:
            tools_config = FileToolsConfig(root=root)
        else:
            tools_config = FileToolsConfig()
    except (ValidationError, ValueError, OSError) as e:
        _fail(f"Configuration error: {e}")

    ctx.ensure_object(dict)
    ctx.obj["config"] = tools_config
    ctx.obj["tools"] = tools_from_config(tools_config)


@cli.command("ls")
@click.argument("path", default="")
@click.pass_context
def list_files(ctx: click.Context, path: str):
    """
    List a directory. Entries are prefixed f: (file) or d: (directory).

    Examples:

        agent-file-tools -r /tmp/project ls src
    """
    for entry in _run(_tools(ctx).list_files, path):
        click.echo(entry)


@cli.command("cat")
@click.argument("path")
@click.option("--plain", is_flag=True, help="Print without syntax highlighting")
@click.pass_context
def read_file(ctx: click.Context, path: str, plain: bool):
    """Print a file as the agent would see it (after transformers)."""
    content = _run(_tools(ctx).read_file, path)
    if plain or not console.is_terminal:
        click.echo(content, nl=False)
    else:
        lexer = Syntax.guess_lexer(path, code=content)
        console.print(Syntax(content, lexer, line_numbers=True))


@cli.command("find")
@click.argument("pattern")
@click.option(
    "--highest",
    is_flag=True,
    help="Only report the highest match in each part of the tree",
)
@click.pass_context
def find_files(ctx: click.Context, pattern: str, highest: bool):
    """
    Find files by glob (default) or regex pattern.

    Examples:

        agent-file-tools find '**/*.py'

        agent-file-tools find 'regex:.*/test_[a-z]+\\.py'

        agent-file-tools find '**/pom.xml' --highest
    """
    for path in _run(_tools(ctx).find_files, pattern, find_highest=highest):
        click.echo(path)


@cli.command("exists")
@click.argument("path", default="")
@click.pass_context
def exists(ctx: click.Context, path: str):
    """Exit with status 0 if the path exists, 1 otherwise."""
    found = _run(_tools(ctx).exists, path)
    click.echo("yes" if found else "no")
    sys.exit(0 if found else 1)


@cli.command("write")
@click.argument("path")
@click.argument("content", required=False)
@click.option("--overwrite", is_flag=True, help="Replace an existing file")
@click.pass_context
def create_file(ctx: click.Context, path: str, content: Optional[str], overwrite: bool):
    """Create a file. Content is read from stdin when not given."""
    tools = _writable(ctx)
    if content is None:
        content = click.get_text_stream("stdin").read()
    click.echo(_run(tools.create_file, path, content, overwrite=overwrite))


@cli.command("edit")
@click.argument("path")
@click.argument("old_content")
@click.argument("new_content")
@click.pass_context
def edit_file(ctx: click.Context, path: str, old_content: str, new_content: str):
    """Replace OLD_CONTENT with NEW_CONTENT in a file."""
    tools = _writable(ctx)
    click.echo(_run(tools.edit_file, path, old_content, new_content))


@cli.command("append")
@click.argument("path")
@click.argument("content", required=False)
@click.option("--create", is_flag=True, help="Create the file if it doesn't exist")
@click.pass_context
def append_file(ctx: click.Context, path: str, content: Optional[str], create: bool):
    """Append to a file. Content is read from stdin when not given."""
    tools = _writable(ctx)
    if content is None:
        content = click.get_text_stream("stdin").read()
    click.echo(_run(tools.append_to_file, path, content, create_if_not_exists=create))


@cli.command("mkdir")
@click.argument("path")
@click.pass_context
def create_directory(ctx: click.Context, path: str):
    """Create a directory (and missing parents)."""
    tools = _writable(ctx)
    click.echo(_run(tools.create_directory, path))


@cli.command("rm")
@click.argument("path")
@click.pass_context
def delete(ctx: click.Context, path: str):
    """Delete a file."""
    tools = _writable(ctx)
    click.echo(_run(tools.delete, path))


@cli.command("tools")
@click.pass_context
def tool_schemas(ctx: click.Context):
    """Print the function calling schemas offered to an LLM as JSON."""
    schemas = LLMFileTools(_tools(ctx)).get_tool_schemas()
    click.echo(json.dumps(schemas, indent=2))


if __name__ == "__main__":
    cli()
