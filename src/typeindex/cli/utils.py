"""CLI utilities."""

from collections.abc import Iterable
from pathlib import Path

import click

from typeindex.config.models import TypeIndexConfig
from typeindex.core.errors import TypeIndexError
from typeindex.discovery import TypeDiscovery, inherits_from_any
from typeindex.registry import TypeFact, TypeRegistry


def get_config(ctx: click.Context) -> TypeIndexConfig:
    """Config loaded by the root command, or defaults when invoked standalone."""
    obj = ctx.find_object(dict)
    if obj is not None and "config" in obj:
        return obj["config"]  # type: ignore[no-any-return]
    return TypeIndexConfig()


def load_registry(
    path: Path,
    config: TypeIndexConfig,
    base_names: Iterable[str] = (),
) -> TypeRegistry:
    """Build a registry from a source tree, a single source file, or a JSON fact file.

    Args:
        path: Directory to scan, ``.py`` file, or ``.json`` fact file
        config: Resolved configuration
        base_names: When given, only types relating to these bases are kept

    Raises:
        click.ClickException: If the sources cannot be read
    """
    discovery = TypeDiscovery(config.discovery)
    bases = set(base_names)
    try:
        if path.is_dir():
            if bases:
                discovery.analyze_for_bases(path, bases)
            else:
                discovery.analyze_directory(path)
            return discovery.registry
        if path.suffix == ".json":
            facts = discovery.load_fact_file(path)
        else:
            facts = discovery.analyze_file(path, path.parent)
    except TypeIndexError as e:
        raise click.ClickException(str(e)) from e

    if not bases:
        return discovery.registry
    return _related_only(facts, bases)


def _related_only(facts: list[TypeFact], bases: set[str]) -> TypeRegistry:
    """Registry holding the facts that relate to ``bases``, ancestors included."""
    by_name = {fact.name: fact for fact in facts}
    registry = TypeRegistry()
    registry.register_all(fact for fact in facts if inherits_from_any(fact, bases, by_name))
    return registry
