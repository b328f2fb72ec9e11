"""Reverse relation indexes: base name -> names of dependent types."""

from __future__ import annotations

from collections.abc import Iterable

from typeindex.registry.models import Relation, TypeFact


class ReverseIndex:
    """Maps a base name to the set of type names related to it by one relation.

    Empty buckets are dropped on removal so ``bases()`` only reports names
    that still have dependents.
    """

    def __init__(self, relation: Relation) -> None:
        self.relation = relation
        self._dependents: dict[str, set[str]] = {}

    def add(self, base: str, dependent: str) -> None:
        self._dependents.setdefault(base, set()).add(dependent)

    def discard(self, base: str, dependent: str) -> None:
        bucket = self._dependents.get(base)
        if bucket is None:
            return
        bucket.discard(dependent)
        if not bucket:
            del self._dependents[base]

    def dependents(self, base: str) -> frozenset[str]:
        return frozenset(self._dependents.get(base, ()))

    def bases(self) -> list[str]:
        return sorted(self._dependents)

    def clear(self) -> None:
        self._dependents.clear()

    def __len__(self) -> int:
        return len(self._dependents)


class RelationIndexes:
    """The three reverse indexes kept in step with the registered facts."""

    def __init__(self) -> None:
        self.by_relation: dict[Relation, ReverseIndex] = {
            relation: ReverseIndex(relation) for relation in Relation
        }

    def __getitem__(self, relation: Relation) -> ReverseIndex:
        return self.by_relation[relation]

    def add_fact(self, fact: TypeFact) -> None:
        for relation, base in fact.relations():
            self.by_relation[relation].add(base, fact.name)

    def remove_fact(self, fact: TypeFact) -> None:
        for relation, base in fact.relations():
            self.by_relation[relation].discard(base, fact.name)

    def dependents_of(self, base: str, relations: Iterable[Relation] = tuple(Relation)) -> set[str]:
        """Union of dependents of ``base`` across the given relations."""
        found: set[str] = set()
        for relation in relations:
            found |= self.by_relation[relation].dependents(base)
        return found

    def clear(self) -> None:
        for index in self.by_relation.values():
            index.clear()
