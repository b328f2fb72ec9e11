"""Tests for registry/views.py and the registry methods built on it."""

from __future__ import annotations

import json

from typeindex.registry.models import TypeFact
from typeindex.registry.registry import TypeRegistry


class TestExport:
    def test_given_empty_registry_when_export_then_zero_statistics(
        self, registry: TypeRegistry
    ) -> None:
        assert registry.export() == {
            "types": [],
            "statistics": {
                "totalTypes": 0,
                "withSuperclass": 0,
                "withInterfaces": 0,
                "withMixins": 0,
                "generic": 0,
            },
        }

    def test_given_app_registry_when_export_then_counts_match(
        self, app_registry: TypeRegistry
    ) -> None:
        """Statistics count facts carrying each kind of relation."""
        # When
        data = app_registry.export()

        # Then
        assert data["statistics"] == {
            "totalTypes": 7,
            "withSuperclass": 5,
            "withInterfaces": 3,
            "withMixins": 2,
            "generic": 1,
        }
        assert [t["name"] for t in data["types"]] == [f.name for f in app_registry.all_types]

    def test_given_export_when_dumped_then_json_serializable(
        self, app_registry: TypeRegistry
    ) -> None:
        text = json.dumps(app_registry.to_dict())

        assert json.loads(text)["statistics"]["totalTypes"] == 7


class TestCreateTypeMap:
    def test_given_no_selector_when_create_type_map_then_identity(
        self, app_registry: TypeRegistry
    ) -> None:
        type_map = app_registry.create_type_map()

        assert type_map["User"] == "User"
        assert len(type_map) == 7

    def test_given_selector_when_create_type_map_then_keys_derived(
        self, registry: TypeRegistry
    ) -> None:
        registry.register_all(
            [
                TypeFact(name="User", library="app.models"),
                TypeFact(name="Order", library="app.orders"),
            ]
        )

        type_map = registry.create_type_map(lambda fact: f"{fact.library}.{fact.name}")

        assert type_map == {"app.models.User": "User", "app.orders.Order": "Order"}

    def test_given_selector_returning_none_when_create_type_map_then_name_used(
        self, registry: TypeRegistry
    ) -> None:
        registry.register_all(
            [
                TypeFact(name="User", library="lib", superclass="Model"),
                TypeFact(name="Model", library="lib"),
            ]
        )

        type_map = registry.create_type_map(lambda fact: fact.superclass)

        assert type_map == {"Model": "Model"}

    def test_given_key_collision_when_create_type_map_then_last_wins(
        self, registry: TypeRegistry
    ) -> None:
        registry.register_all(
            [
                TypeFact(name="First", library="lib"),
                TypeFact(name="Second", library="lib"),
            ]
        )

        assert registry.create_type_map(lambda fact: fact.library) == {"lib": "Second"}


class TestRenderHierarchy:
    """ASCII superclass tree rendering."""

    def test_given_chain_when_rendered_then_nested(self, registry: TypeRegistry) -> None:
        """Root, one child, one grandchild."""
        # Given
        registry.register_all(
            [
                TypeFact(name="Root", library="lib"),
                TypeFact(name="User", library="lib", superclass="Root"),
                TypeFact(name="Admin", library="lib", superclass="User"),
            ]
        )

        # When / Then
        assert registry.render_hierarchy("User") == "User\n└── Admin\n"
        assert registry.render_hierarchy("Root") == "Root\n└── User\n    └── Admin\n"

    def test_given_siblings_when_rendered_then_tee_and_pipe(
        self, app_registry: TypeRegistry
    ) -> None:
        expected = "Model\n├── Product\n└── User\n    └── Admin\n"

        assert app_registry.render_hierarchy("Model") == expected

    def test_given_non_last_sibling_with_children_when_rendered_then_pipe_continuation(
        self, registry: TypeRegistry
    ) -> None:
        registry.register_all(
            [
                TypeFact(name="Base", library="lib"),
                TypeFact(name="A", library="lib", superclass="Base"),
                TypeFact(name="A1", library="lib", superclass="A"),
                TypeFact(name="A2", library="lib", superclass="A"),
                TypeFact(name="B", library="lib", superclass="Base"),
            ]
        )

        assert registry.render_hierarchy("Base") == (
            "Base\n├── A\n│   ├── A1\n│   └── A2\n└── B\n"
        )

    def test_given_leaf_when_rendered_then_single_line(self, app_registry: TypeRegistry) -> None:
        assert app_registry.render_hierarchy("Admin") == "Admin\n"

    def test_given_unregistered_root_when_rendered_then_empty(
        self, app_registry: TypeRegistry
    ) -> None:
        assert app_registry.render_hierarchy("Missing") == ""

    def test_given_interfaces_when_rendered_then_only_superclass_edges(
        self, app_registry: TypeRegistry
    ) -> None:
        app_registry.register(TypeFact(name="Serializable", library="lib"))

        assert app_registry.render_hierarchy("Serializable") == "Serializable\n"

    def test_given_cycle_when_rendered_then_finite(self, registry: TypeRegistry) -> None:
        """Each name appears at most once even with a cyclic superclass chain."""
        # Given
        registry.register_all(
            [
                TypeFact(name="A", library="lib", superclass="B"),
                TypeFact(name="B", library="lib", superclass="A"),
            ]
        )

        # When
        rendered = registry.render_hierarchy("A")

        # Then
        assert rendered == "A\n└── B\n"
