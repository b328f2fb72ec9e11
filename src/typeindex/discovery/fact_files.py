"""Reading and writing fact files.

A fact file is the JSON export of a registry (``{"types": [...], "statistics":
{...}}``) or a bare list of type objects. External extractors for other
languages can hand facts to typeindex this way.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from typeindex.core.errors import DiscoveryError
from typeindex.core.logging import get_logger
from typeindex.registry.models import TypeFact

if TYPE_CHECKING:
    from typeindex.registry.registry import TypeRegistry

log = get_logger(__name__)


def load_facts(path: Path) -> list[TypeFact]:
    """Parse a fact file into TypeFacts, preserving file order.

    Raises:
        DiscoveryError: If the file cannot be read or is not a valid fact file.
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DiscoveryError.source_unreadable(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise DiscoveryError.malformed_facts(str(path), str(e)) from e

    entries = data.get("types") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise DiscoveryError.malformed_facts(str(path), "expected a 'types' list")

    facts = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise DiscoveryError.malformed_facts(str(path), f"types[{i}] is not an object")
        try:
            facts.append(TypeFact.from_dict(entry))
        except (KeyError, TypeError) as e:
            raise DiscoveryError.malformed_facts(str(path), f"types[{i}]: missing {e}") from e

    log.info("facts_loaded", path=str(path), count=len(facts))
    return facts


def write_export(registry: TypeRegistry, path: Path, *, indent: int = 2) -> None:
    """Write ``registry.export()`` as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(registry.export(), indent=indent) + "\n", encoding="utf-8")
    log.info("export_written", path=str(path), count=len(registry))
