"""typeindex query command - relation queries against discovered types."""

from pathlib import Path

import click

from typeindex.cli.utils import get_config, load_registry
from typeindex.registry import TypeFact


@click.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--subclasses-of", "subclasses_of", metavar="NAME", help="Direct subclasses")
@click.option("--implementers-of", "implementers_of", metavar="NAME", help="Implementers")
@click.option("--mixin", metavar="NAME", help="Types using a mixin")
@click.option(
    "--descendants-of", "descendants_of", metavar="NAME", help="All transitive descendants"
)
@click.option(
    "--any-base",
    "any_base",
    multiple=True,
    metavar="NAME",
    help="Types relating to any of these bases (repeatable)",
)
@click.option(
    "--generic",
    nargs=3,
    type=str,
    default=None,
    metavar="BASE PARAM TYPE",
    help="Types binding BASE.PARAM to TYPE",
)
@click.option("--library", "show_library", is_flag=True, help="Print the library after each name")
@click.pass_context
def query_command(
    ctx: click.Context,
    path: Path,
    subclasses_of: str | None,
    implementers_of: str | None,
    mixin: str | None,
    descendants_of: str | None,
    any_base: tuple[str, ...],
    generic: tuple[str, str, str] | None,
    show_library: bool,
) -> None:
    """Print the names of types matching exactly one query, sorted.

    PATH is a source directory, a Python file, or a JSON fact file.
    """
    chosen = [
        opt
        for opt, value in (
            ("--subclasses-of", subclasses_of),
            ("--implementers-of", implementers_of),
            ("--mixin", mixin),
            ("--descendants-of", descendants_of),
            ("--any-base", any_base),
            ("--generic", generic),
        )
        if value is not None and value != ()
    ]
    if len(chosen) != 1:
        raise click.UsageError("Pass exactly one query option")

    registry = load_registry(path, get_config(ctx))

    results: list[TypeFact]
    if subclasses_of is not None:
        results = registry.find_subclasses_of(subclasses_of)
    elif implementers_of is not None:
        results = registry.find_implementers_of(implementers_of)
    elif mixin is not None:
        results = registry.find_by_mixin(mixin)
    elif descendants_of is not None:
        results = registry.find_all_descendants_of(descendants_of)
    elif any_base:
        results = registry.find_by_any_base(set(any_base))
    elif generic is not None:
        results = registry.find_by_generic_argument(*generic)
    else:
        results = []

    for fact in results:
        click.echo(f"{fact.name}\t{fact.library}" if show_library else fact.name)
