"""typeindex tree command - print a superclass hierarchy."""

from pathlib import Path

import click

from typeindex.cli.utils import get_config, load_registry


@click.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.argument("root")
@click.pass_context
def tree_command(ctx: click.Context, path: Path, root: str) -> None:
    """Print the subclass tree below ROOT.

    Only superclass relations are drawn; interfaces and mixins are not.
    """
    registry = load_registry(path, get_config(ctx))
    rendered = registry.render_hierarchy(root)
    if not rendered:
        raise click.ClickException(f"Type not found: {root}")
    click.echo(rendered, nl=False)
