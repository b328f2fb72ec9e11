"""typeindex export command - write the registry as JSON."""

import json
from pathlib import Path

import click

from typeindex.cli.utils import get_config, load_registry
from typeindex.discovery import write_export


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout",
)
@click.pass_context
def export_command(ctx: click.Context, path: Path, output: Path | None) -> None:
    """Export discovered types and statistics as JSON.

    The output can be loaded back with any PATH argument ending in .json.
    """
    config = get_config(ctx)
    registry = load_registry(path, config)

    if output is None:
        click.echo(json.dumps(registry.export(), indent=config.render.indent))
        return

    write_export(registry, output, indent=config.render.indent)
    click.echo(f"Wrote {len(registry)} types to {output}", err=True)
