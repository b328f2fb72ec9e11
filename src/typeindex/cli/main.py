"""typeindex CLI - typeindex command."""

from pathlib import Path

import click

from typeindex import __version__
from typeindex.cli.export import export_command
from typeindex.cli.query import query_command
from typeindex.cli.scan import scan_command
from typeindex.cli.tree import tree_command
from typeindex.config.loader import load_config
from typeindex.core.errors import ConfigError
from typeindex.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="typeindex")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: .typeindex/config.yaml in the current directory)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """typeindex - who extends, implements or mixes in what."""
    try:
        config = load_config(config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


cli.add_command(scan_command, name="scan")
cli.add_command(query_command, name="query")
cli.add_command(tree_command, name="tree")
cli.add_command(export_command, name="export")


if __name__ == "__main__":
    cli()
