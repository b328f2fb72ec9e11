"""Shared registry fixtures."""

from __future__ import annotations

import pytest

from typeindex.registry.models import MethodFact, TypeFact
from typeindex.registry.registry import TypeRegistry


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry()


@pytest.fixture
def app_registry() -> TypeRegistry:
    """A small application model: entities, repositories, services."""
    registry = TypeRegistry()
    registry.register_all(
        [
            TypeFact(name="Model", library="app.models"),
            TypeFact(
                name="User",
                library="app.models",
                superclass="Model",
                interfaces=("Serializable",),
                mixins=("TimestampMixin",),
            ),
            TypeFact(name="Admin", library="app.models", superclass="User"),
            TypeFact(
                name="Product",
                library="app.models",
                superclass="Model",
                interfaces=("Serializable", "Cacheable"),
            ),
            TypeFact(name="Repository", library="app.repositories", type_parameters=("T",)),
            TypeFact(
                name="UserRepository",
                library="app.repositories",
                superclass="Repository",
                mixins=("LoggingMixin",),
                generic_arguments={"Repository.T": "User"},
                methods=(
                    MethodFact(
                        name="find_by_email",
                        return_type="User | None",
                        parameter_types=("str",),
                    ),
                ),
            ),
            TypeFact(
                name="ProductRepository",
                library="app.repositories",
                superclass="Repository",
                interfaces=("Cacheable",),
                generic_arguments={"Repository.T": "Product"},
            ),
        ]
    )
    return registry
