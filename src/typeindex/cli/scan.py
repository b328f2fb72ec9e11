"""typeindex scan command - list discovered types."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from typeindex.cli.utils import get_config, load_registry
from typeindex.registry import TypeRegistry


def _types_table(registry: TypeRegistry) -> Table:
    table = Table(title=f"{len(registry)} types", title_justify="left")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Library", style="dim")
    table.add_column("Superclass")
    table.add_column("Interfaces")
    table.add_column("Mixins")
    table.add_column("Generic arguments")

    for fact in sorted(registry, key=lambda f: f.name):
        table.add_row(
            fact.name,
            fact.library,
            fact.superclass or "",
            ", ".join(fact.interfaces),
            ", ".join(fact.mixins),
            ", ".join(f"{k}={v}" for k, v in fact.generic_arguments.items()),
        )
    return table


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--base",
    "bases",
    multiple=True,
    help="Only keep types relating to this base (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Output the export as JSON")
@click.pass_context
def scan_command(ctx: click.Context, path: Path, bases: tuple[str, ...], as_json: bool) -> None:
    """Discover types under PATH and list them.

    PATH is a source directory, a Python file, or a JSON fact file
    (default: current directory).
    """
    config = get_config(ctx)
    registry = load_registry(path, config, bases)

    if as_json:
        click.echo(json.dumps(registry.export(), indent=config.render.indent))
        return

    Console().print(_types_table(registry))
