"""Read-only views over registered facts: export, type maps, hierarchy trees."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from typeindex.registry.models import TypeFact

_TEE = "├── "
_CORNER = "└── "
_PIPE = "│   "
_BLANK = "    "


def export_facts(facts: Iterable[TypeFact]) -> dict[str, Any]:
    """Structural snapshot: every fact plus aggregate counts.

    Only plain dicts, lists, strings, ints and bools, so the result can go
    straight to ``json.dumps`` or ``yaml.safe_dump``.
    """
    facts = list(facts)
    return {
        "types": [fact.to_dict() for fact in facts],
        "statistics": {
            "totalTypes": len(facts),
            "withSuperclass": sum(1 for f in facts if f.superclass is not None),
            "withInterfaces": sum(1 for f in facts if f.interfaces),
            "withMixins": sum(1 for f in facts if f.mixins),
            "generic": sum(1 for f in facts if f.type_parameters),
        },
    }


def create_type_map(
    facts: Iterable[TypeFact],
    key_selector: Callable[[TypeFact], str | None] | None = None,
) -> dict[str, str]:
    """Map a derived key to each fact's name.

    ``key_selector`` defaults to the fact's own name; a selector returning
    ``None`` falls back to the name as well. When two facts produce the same
    key, the one applied last wins.
    """
    type_map: dict[str, str] = {}
    for fact in facts:
        key = key_selector(fact) if key_selector is not None else None
        type_map[key if key is not None else fact.name] = fact.name
    return type_map


def render_hierarchy(
    root: str,
    lookup: Callable[[str], TypeFact | None],
    children_of: Callable[[str], list[TypeFact]],
) -> str:
    """Render the superclass tree below ``root`` as indented ASCII.

    Example for ``Model`` with subclasses ``Product`` and ``User``::

        Model
        ├── Product
        └── User

    Returns an empty string when ``root`` is not registered. A name is
    expanded at most once, so a cyclic superclass chain renders finitely.
    """
    if lookup(root) is None:
        return ""

    lines = [root]
    visited = {root}

    def expand(name: str, indent: str) -> list[tuple[str, str, str]]:
        """Unvisited children of ``name`` as (child, line, child indent)."""
        children = [c.name for c in children_of(name) if c.name not in visited]
        visited.update(children)
        entries = []
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            branch, cont = (_CORNER, _BLANK) if is_last else (_TEE, _PIPE)
            entries.append((child, f"{indent}{branch}{child}", indent + cont))
        return entries

    # Stack of sibling lists still to emit, innermost level last
    pending = [expand(root, "")]
    while pending:
        siblings = pending[-1]
        if not siblings:
            pending.pop()
            continue
        child, line, child_indent = siblings.pop(0)
        lines.append(line)
        pending.append(expand(child, child_indent))

    return "".join(f"{line}\n" for line in lines)
