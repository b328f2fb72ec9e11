"""Fact records for the type registry.

A ``TypeFact`` describes one declared type: what it extends, implements and
mixes in, which generic arguments it binds on those bases, and its public
members. Facts are immutable; the registry indexes them by name.

Generic bindings use a flat qualified key, ``"{Base}.{Param}"``. For
``class UserRepository(Repository[User])`` with ``class Repository(Generic[T])``
the fact records ``{"Repository.T": "User"}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class Relation(str, Enum):
    """Kind of edge between a dependent type and a base name."""

    SUPERCLASS = "superclass"
    INTERFACE = "interface"
    MIXIN = "mixin"


def qualified_key(base: str, param: str) -> str:
    """Flat key under which a generic binding is stored."""
    return f"{base}.{param}"


@dataclass(frozen=True, slots=True)
class MethodFact:
    """A public method declared on a type."""

    name: str
    return_type: str
    parameter_types: tuple[str, ...] = ()
    is_static: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameter_types", tuple(self.parameter_types))

    def __str__(self) -> str:
        return f"{self.return_type} {self.name}({', '.join(self.parameter_types)})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "returnType": self.return_type,
            "parameterTypes": list(self.parameter_types),
            "isStatic": self.is_static,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MethodFact:
        return cls(
            name=data["name"],
            return_type=data.get("returnType", "Any"),
            parameter_types=tuple(data.get("parameterTypes", ())),
            is_static=bool(data.get("isStatic", False)),
        )


@dataclass(frozen=True, slots=True)
class TypeFact:
    """Normalized facts about one declared type.

    Sequences are stored as tuples and ``generic_arguments`` as a read-only
    mapping, so a registered fact cannot drift away from what the indexes
    recorded for it.
    """

    name: str
    library: str
    superclass: str | None = None
    interfaces: tuple[str, ...] = ()
    mixins: tuple[str, ...] = ()
    type_parameters: tuple[str, ...] = ()
    generic_arguments: Mapping[str, str] = field(default_factory=dict, hash=False)
    methods: tuple[MethodFact, ...] = ()
    properties: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "interfaces", tuple(self.interfaces))
        object.__setattr__(self, "mixins", tuple(self.mixins))
        object.__setattr__(self, "type_parameters", tuple(self.type_parameters))
        object.__setattr__(
            self, "generic_arguments", MappingProxyType(dict(self.generic_arguments))
        )
        object.__setattr__(self, "methods", tuple(self.methods))
        object.__setattr__(self, "properties", tuple(self.properties))

    def __str__(self) -> str:
        return f"TypeFact({self.name} from {self.library})"

    def relations(self) -> Iterator[tuple[Relation, str]]:
        """Yield every (relation, base name) edge this fact declares."""
        if self.superclass is not None:
            yield Relation.SUPERCLASS, self.superclass
        for name in self.interfaces:
            yield Relation.INTERFACE, name
        for name in self.mixins:
            yield Relation.MIXIN, name

    def inherits_from(self, base: str) -> bool:
        """True if ``base`` is the superclass, an interface, or a mixin."""
        return self.superclass == base or base in self.interfaces or base in self.mixins

    def get_generic_argument(self, base: str, param: str) -> str | None:
        return self.generic_arguments.get(qualified_key(base, param))

    def to_dict(self) -> dict[str, Any]:
        """Serialize, omitting an absent superclass and empty collections."""
        data: dict[str, Any] = {"name": self.name, "library": self.library}
        if self.superclass is not None:
            data["superclass"] = self.superclass
        if self.interfaces:
            data["interfaces"] = list(self.interfaces)
        if self.mixins:
            data["mixins"] = list(self.mixins)
        if self.type_parameters:
            data["typeParameters"] = list(self.type_parameters)
        if self.generic_arguments:
            data["genericArguments"] = dict(self.generic_arguments)
        if self.methods:
            data["methods"] = [m.to_dict() for m in self.methods]
        if self.properties:
            data["properties"] = list(self.properties)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TypeFact:
        """Build a fact from the shape produced by ``to_dict``.

        Raises:
            KeyError: if ``name`` or ``library`` is missing.
        """
        return cls(
            name=data["name"],
            library=data["library"],
            superclass=data.get("superclass"),
            interfaces=tuple(data.get("interfaces", ())),
            mixins=tuple(data.get("mixins", ())),
            type_parameters=tuple(data.get("typeParameters", ())),
            generic_arguments=dict(data.get("genericArguments", {})),
            methods=tuple(MethodFact.from_dict(m) for m in data.get("methods", ())),
            properties=tuple(data.get("properties", ())),
        )


def sorted_by_name(facts: Iterable[TypeFact]) -> list[TypeFact]:
    """Deterministic ordering used by every registry query."""
    return sorted(facts, key=lambda fact: fact.name)
