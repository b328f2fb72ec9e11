"""In-memory type registry with reverse relation indexes.

The registry owns the authoritative ``name -> TypeFact`` map and three reverse
indexes (superclass, interface, mixin). Every query result is sorted by name so
code generators see the same output regardless of ingestion order.

Nothing here raises on unknown names: point lookups return ``None`` and
relation queries on a name nobody references return an empty list. Relation
targets are not validated, so a dangling superclass name simply never shows up
in results.

The registry is not thread-safe. Callers serialize writers; concurrent readers
are fine while no writer is active.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from typeindex.core.logging import get_logger
from typeindex.registry import views
from typeindex.registry.index import RelationIndexes
from typeindex.registry.models import Relation, TypeFact, qualified_key, sorted_by_name

log = get_logger(__name__)

TypePredicate = Callable[[TypeFact], bool]


class TypeRegistry:
    """Registry for storing and querying type facts.

    Usage::

        registry = TypeRegistry()
        registry.register_all(facts)

        repos = registry.find_subclasses_of("Repository")
        everything = registry.find_all_descendants_of("Model")
        print(registry.render_hierarchy("Model"))
    """

    def __init__(self) -> None:
        self._types: dict[str, TypeFact] = {}
        self._indexes = RelationIndexes()

    # ------------------------------------------------------------------
    # Collection protocol
    # ------------------------------------------------------------------

    @property
    def all_types(self) -> list[TypeFact]:
        """All facts in registration order."""
        return list(self._types.values())

    @property
    def is_empty(self) -> bool:
        return not self._types

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeFact]:
        return iter(list(self._types.values()))

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def register(self, fact: TypeFact) -> None:
        """Insert or replace the fact stored under ``fact.name``.

        When a name is registered again, the relations of the previous fact
        are withdrawn from the reverse indexes first, so the indexes always
        describe exactly the facts currently held.
        """
        previous = self._types.get(fact.name)
        if previous is not None:
            self._indexes.remove_fact(previous)
            log.debug("type_replaced", type=fact.name, library=fact.library)

        self._types[fact.name] = fact
        self._indexes.add_fact(fact)

    def register_all(self, facts: Iterable[TypeFact]) -> None:
        count = 0
        for fact in facts:
            self.register(fact)
            count += 1
        log.debug("types_registered", count=count, total=len(self._types))

    def clear(self) -> None:
        self._types.clear()
        self._indexes.clear()
        log.debug("registry_cleared")

    # ------------------------------------------------------------------
    # Point and direct relation queries
    # ------------------------------------------------------------------

    def find_by_name(self, name: str) -> TypeFact | None:
        return self._types.get(name)

    def find_subclasses_of(self, base: str) -> list[TypeFact]:
        """Types whose superclass is ``base``."""
        return self._resolve(self._indexes[Relation.SUPERCLASS].dependents(base))

    def find_implementers_of(self, interface: str) -> list[TypeFact]:
        """Types that list ``interface`` among their interfaces."""
        return self._resolve(self._indexes[Relation.INTERFACE].dependents(interface))

    def find_by_mixin(self, mixin: str) -> list[TypeFact]:
        """Types that use ``mixin``."""
        return self._resolve(self._indexes[Relation.MIXIN].dependents(mixin))

    def find_by_any_base(self, base_names: Iterable[str]) -> list[TypeFact]:
        """Types that extend, implement, or mix in any of ``base_names``.

        A type matching several bases or several relations appears once.
        """
        found: set[str] = set()
        for base in base_names:
            found |= self._indexes.dependents_of(base)
        return self._resolve(found)

    # ------------------------------------------------------------------
    # Traversal and search
    # ------------------------------------------------------------------

    def find_all_descendants_of(self, base: str) -> list[TypeFact]:
        """All types reachable from ``base`` through any relation, transitively.

        Breadth-first over the reverse indexes. Each name is enqueued at most
        once, so relation data containing a cycle still terminates; ``base``
        itself is only returned when such a cycle leads back to it.
        """
        found: set[str] = set()
        queue: deque[str] = deque([base])

        while queue:
            current = queue.popleft()
            for dependent in sorted(self._indexes.dependents_of(current)):
                if dependent not in found:
                    found.add(dependent)
                    queue.append(dependent)

        return self._resolve(found)

    def where(self, predicate: TypePredicate) -> list[TypeFact]:
        """Types for which ``predicate`` returns true. Scans every fact."""
        return sorted_by_name(fact for fact in self._types.values() if predicate(fact))

    def get_generic_argument(self, fact: TypeFact, base: str, param: str) -> str | None:
        return fact.generic_arguments.get(qualified_key(base, param))

    def find_by_generic_argument(self, base: str, param: str, concrete: str) -> list[TypeFact]:
        """Types binding ``base.param`` to exactly ``concrete`` (string equality)."""
        key = qualified_key(base, param)
        return self.where(lambda fact: fact.generic_arguments.get(key) == concrete)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def create_type_map(
        self, key_selector: Callable[[TypeFact], str | None] | None = None
    ) -> dict[str, str]:
        return views.create_type_map(self._types.values(), key_selector)

    def export(self) -> dict[str, Any]:
        return views.export_facts(self._types.values())

    to_dict = export

    def render_hierarchy(self, root: str) -> str:
        return views.render_hierarchy(root, self.find_by_name, self.find_subclasses_of)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, names: Iterable[str]) -> list[TypeFact]:
        """Map names to registered facts, dropping dangling ones, sorted."""
        return sorted_by_name(self._types[name] for name in names if name in self._types)
