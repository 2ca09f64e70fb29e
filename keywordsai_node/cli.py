"""Keywords AI node command-line interface.

Developer commands for exercising the node against the live API.

Available Commands:
    - test-credentials: Verify the API key with the credential test request
    - list-prompts: Show the prompt dropdown options
    - list-versions: Show the version dropdown options for a prompt
    - list-variables: Show the variable names of a prompt version
    - run: Execute a JSON file of item parameters and print the outputs
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from keywordsai_node._version import get_version
from keywordsai_node.exceptions import ItemExecutionError, KeywordsAIError
from keywordsai_node.models.options import OptionEntry
from keywordsai_node.node import KeywordsAINode

console = Console()

T = TypeVar("T")


def _run_with_node(api_key: str | None, action: Callable[[KeywordsAINode], Awaitable[T]]) -> T:
    async def runner() -> T:
        async with KeywordsAINode(api_key=api_key) as node:
            return await action(node)

    return asyncio.run(runner())


def _print_options(title: str, options: list[OptionEntry]) -> None:
    table = Table(title=title)
    table.add_column("Name")
    table.add_column("Value")
    for option in options:
        table.add_row(option.name, str(option.value))
    console.print(table)


def _fail(message: str) -> None:
    console.print(f"[bold red]✗[/bold red] {escape(message)}")
    raise SystemExit(1)


api_key_option = click.option(
    "--api-key",
    envvar="KEYWORDSAI_API_KEY",
    default=None,
    help="Keywords AI API key (defaults to KEYWORDSAI_API_KEY)",
)


@click.group()
@click.version_option(version=get_version(), prog_name="keywordsai-node")
def cli() -> None:
    """Keywords AI node CLI.

    Use --help with any command for more information.
    """
    pass


@cli.command("test-credentials")
@api_key_option
def test_credentials(api_key: str | None) -> None:
    """Verify the API key against GET /models."""
    try:
        _run_with_node(api_key, lambda node: node.test_credentials())
    except (KeywordsAIError, ValueError) as e:
        _fail(f"Credential test failed: {e}")
    console.print("[bold green]✓[/bold green] Credentials OK")


@cli.command("list-prompts")
@api_key_option
def list_prompts_command(api_key: str | None) -> None:
    """List prompts available to the API key."""
    try:
        options = _run_with_node(api_key, lambda node: node.get_prompts())
    except (KeywordsAIError, ValueError) as e:
        _fail(str(e))
    _print_options("Prompts", options)


@cli.command("list-versions")
@click.argument("prompt_id")
@api_key_option
def list_versions_command(prompt_id: str, api_key: str | None) -> None:
    """List versions of PROMPT_ID."""
    try:
        options = _run_with_node(api_key, lambda node: node.get_versions(prompt_id))
    except (KeywordsAIError, ValueError) as e:
        _fail(str(e))
    _print_options(f"Versions of {prompt_id}", options)


@cli.command("list-variables")
@click.argument("prompt_id")
@click.argument("version")
@api_key_option
def list_variables_command(prompt_id: str, version: str, api_key: str | None) -> None:
    """List variable names of PROMPT_ID at VERSION (a number or 'latest')."""
    try:
        options = _run_with_node(api_key, lambda node: node.get_variables(prompt_id, version))
    except (KeywordsAIError, ValueError) as e:
        _fail(str(e))
    _print_options(f"Variables of {prompt_id} @ {version}", options)


@cli.command("run")
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--continue-on-fail", is_flag=True, default=False, help="Record item failures instead of aborting")
@api_key_option
def run(items_file: Path, continue_on_fail: bool, api_key: str | None) -> None:
    """Execute the items in ITEMS_FILE (a JSON list of node parameters)."""
    try:
        items: Any = json.loads(items_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        _fail(f"ITEMS_FILE is not valid JSON: {e}")
    if isinstance(items, dict):
        items = [items]
    if not isinstance(items, list):
        _fail("ITEMS_FILE must contain a JSON object or a list of objects")

    try:
        outputs = _run_with_node(api_key, lambda node: node.execute(items, continue_on_fail=continue_on_fail))
    except ItemExecutionError as e:
        console.print_json(data=e.partial_results)
        _fail(str(e))
    except (KeywordsAIError, ValueError) as e:
        _fail(str(e))
    console.print_json(data=outputs)


if __name__ == "__main__":
    cli()
