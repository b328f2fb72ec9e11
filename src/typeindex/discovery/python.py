"""Python type extractor.

Turns top-level class definitions into TypeFacts using tree-sitter.

Python has a single list of bases, so relations are assigned by position and
name:
- bases listed in ``marker_bases`` (object, Generic, Protocol, ABC) are not
  relations; ``Generic[T]`` and ``Protocol[T]`` contribute type parameters
- bases whose name ends with a mixin suffix are mixins
- the first remaining base is the superclass
- every other base is an interface

Generic arguments are recorded as ``{"Base.Param": "Arg"}`` when the base's
own type parameters are known (from the same scan). Unknown bases keep their
relation but record no bindings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import tree_sitter
import tree_sitter_python

from typeindex.core.errors import DiscoveryError
from typeindex.core.logging import get_logger
from typeindex.registry.models import MethodFact, TypeFact, qualified_key

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

    from typeindex.config.models import DiscoveryConfig

log = get_logger(__name__)

_UNTYPED = "Any"
_TYPE_PARAMETER_SOURCES = frozenset({"Generic", "Protocol"})
_STATIC_DECORATORS = frozenset({"staticmethod", "classmethod"})


@dataclass
class BaseRef:
    """One entry of a class's base list, e.g. ``Repository[User]``."""

    name: str
    type_arguments: list[str] = field(default_factory=list)


def _text(node: Node | None) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode()


def _unwrap_decorated(node: Node) -> tuple[Node | None, list[str]]:
    """Return (definition, decorator names) for a possibly decorated node."""
    if node.type != "decorated_definition":
        return node, []
    decorators = []
    for child in node.children:
        if child.type == "decorator":
            expr = child.named_children[0] if child.named_children else None
            decorators.append(_text(expr))
    return node.child_by_field_name("definition"), decorators


class PythonTypeExtractor:
    """Extracts TypeFacts from Python source.

    Usage::

        extractor = PythonTypeExtractor(config.discovery)
        tree = extractor.parse(source)
        params = extractor.declared_type_parameters(tree)
        facts = extractor.extract(tree, "app.models", params)
    """

    def __init__(self, config: DiscoveryConfig) -> None:
        self._config = config
        self._mixin_suffixes = tuple(config.mixin_suffixes)
        self._marker_bases = frozenset(config.marker_bases)
        try:
            language = tree_sitter.Language(tree_sitter_python.language())
        except (TypeError, ValueError) as err:
            raise DiscoveryError.grammar_unavailable("python") from err
        self._parser = tree_sitter.Parser(language)

    def parse(self, source: str | bytes) -> Tree:
        if isinstance(source, str):
            source = source.encode()
        return self._parser.parse(source)

    # ------------------------------------------------------------------
    # Pass 1: type parameters per class
    # ------------------------------------------------------------------

    def declared_type_parameters(self, tree: Tree) -> dict[str, tuple[str, ...]]:
        """Map each top-level class name to its declared type parameters."""
        declared: dict[str, tuple[str, ...]] = {}
        for cls in self._classes(tree):
            params = self._type_parameters(cls)
            if params:
                declared[_text(cls.child_by_field_name("name"))] = params
        return declared

    # ------------------------------------------------------------------
    # Pass 2: facts
    # ------------------------------------------------------------------

    def extract(
        self,
        tree: Tree,
        library: str,
        known_type_parameters: dict[str, tuple[str, ...]] | None = None,
    ) -> list[TypeFact]:
        """Build a TypeFact for every top-level class in ``tree``.

        Args:
            tree: Parsed module.
            library: Identifier recorded as each fact's library.
            known_type_parameters: Type parameters of classes seen so far,
                used to name generic bindings on bases.
        """
        if tree.root_node.has_error:
            log.warning("source_has_syntax_errors", library=library)

        known = dict(known_type_parameters or {})
        known.update(self.declared_type_parameters(tree))

        facts = []
        for cls in self._classes(tree):
            name = _text(cls.child_by_field_name("name"))
            if not name or self._is_hidden(name):
                continue
            facts.append(self._extract_class(cls, name, library, known))
        return facts

    def _extract_class(
        self,
        cls: Node,
        name: str,
        library: str,
        known: dict[str, tuple[str, ...]],
    ) -> TypeFact:
        superclass: str | None = None
        interfaces: list[str] = []
        mixins: list[str] = []
        generic_arguments: dict[str, str] = {}

        for base in self._bases(cls):
            if base.name in self._marker_bases:
                continue
            if base.name.endswith(self._mixin_suffixes):
                mixins.append(base.name)
            elif superclass is None:
                superclass = base.name
            else:
                interfaces.append(base.name)

            params = known.get(base.name, ())
            for param, arg in zip(params, base.type_arguments):
                generic_arguments[qualified_key(base.name, param)] = arg

        methods, properties = self._members(cls)
        return TypeFact(
            name=name,
            library=library,
            superclass=superclass,
            interfaces=tuple(interfaces),
            mixins=tuple(mixins),
            type_parameters=self._type_parameters(cls),
            generic_arguments=generic_arguments,
            methods=tuple(methods),
            properties=tuple(properties),
        )

    # ------------------------------------------------------------------
    # Node helpers
    # ------------------------------------------------------------------

    def _is_hidden(self, name: str) -> bool:
        return name.startswith("_") and not self._config.include_private

    def _classes(self, tree: Tree) -> list[Node]:
        classes = []
        for child in tree.root_node.named_children:
            definition, _ = _unwrap_decorated(child)
            if definition is not None and definition.type == "class_definition":
                classes.append(definition)
        return classes

    def _bases(self, cls: Node) -> list[BaseRef]:
        arg_list = cls.child_by_field_name("superclasses")
        if arg_list is None:
            return []
        bases = []
        for node in arg_list.named_children:
            if node.type == "subscript":
                value = node.child_by_field_name("value")
                args = [_text(n) for n in node.children_by_field_name("subscript")]
                bases.append(BaseRef(self._simple_name(value), args))
            elif node.type in ("identifier", "attribute"):
                bases.append(BaseRef(self._simple_name(node)))
            # keyword_argument (metaclass=...), splats and calls are not bases we can name
        return bases

    @staticmethod
    def _simple_name(node: Node | None) -> str:
        """``abc.ABC`` -> ``ABC``; ``Repository`` -> ``Repository``."""
        if node is not None and node.type == "attribute":
            return _text(node.child_by_field_name("attribute"))
        return _text(node)

    def _type_parameters(self, cls: Node) -> tuple[str, ...]:
        params: list[str] = []

        # PEP 695: class Box[T, U]: ...
        declared = cls.child_by_field_name("type_parameters")
        if declared is not None:
            for node in declared.named_children:
                param = _text(node).split(":", 1)[0].split("=", 1)[0].strip().lstrip("*")
                if param and param not in params:
                    params.append(param)

        # Generic[T] / Protocol[T] in the base list
        for base in self._bases(cls):
            if base.name in _TYPE_PARAMETER_SOURCES:
                for arg in base.type_arguments:
                    if arg.isidentifier() and arg not in params:
                        params.append(arg)

        return tuple(params)

    def _members(self, cls: Node) -> tuple[list[MethodFact], list[str]]:
        """Public methods, then fields followed by property getters."""
        body = cls.child_by_field_name("body")
        if body is None:
            return [], []

        methods: list[MethodFact] = []
        fields: list[str] = []
        getters: list[str] = []

        for stmt in body.named_children:
            if stmt.type == "expression_statement":
                for name in self._assigned_names(stmt, receiver=None):
                    if not self._is_hidden(name) and name not in fields:
                        fields.append(name)
                continue

            definition, decorators = _unwrap_decorated(stmt)
            if definition is None or definition.type != "function_definition":
                continue
            name = _text(definition.child_by_field_name("name"))

            if name == "__init__":
                for attr in self._instance_attributes(definition):
                    if not self._is_hidden(attr) and attr not in fields:
                        fields.append(attr)

            if self._is_hidden(name):
                continue
            if "property" in decorators:
                getters.append(name)
                continue
            if any(d.endswith((".setter", ".deleter")) for d in decorators):
                continue
            methods.append(self._method(definition, name, decorators))

        properties = fields + [g for g in getters if g not in fields]
        return methods, properties

    def _method(self, func: Node, name: str, decorators: list[str]) -> MethodFact:
        is_static = any(d in _STATIC_DECORATORS for d in decorators)
        param_types = self._parameter_types(func)
        # Drop the receiver (self / cls); staticmethods have none
        if "staticmethod" not in decorators and param_types:
            param_types = param_types[1:]
        return_node = func.child_by_field_name("return_type")
        return MethodFact(
            name=name,
            return_type=_text(return_node) or _UNTYPED,
            parameter_types=tuple(param_types),
            is_static=is_static,
        )

    @staticmethod
    def _parameter_types(func: Node) -> list[str]:
        params = func.child_by_field_name("parameters")
        if params is None:
            return []
        types: list[str] = []
        for node in params.named_children:
            if node.type in ("identifier", "default_parameter"):
                types.append(_UNTYPED)
            elif node.type == "typed_default_parameter":
                types.append(_text(node.child_by_field_name("type")) or _UNTYPED)
            elif node.type == "typed_parameter":
                types.append(_text(node.child_by_field_name("type")) or _UNTYPED)
            elif node.type in ("list_splat_pattern", "dictionary_splat_pattern"):
                types.append(_UNTYPED)
            # keyword_separator / positional_separator carry no type
        return types

    def _instance_attributes(self, func: Node) -> list[str]:
        """Names assigned as ``self.<name>`` directly in a method body."""
        body = func.child_by_field_name("body")
        if body is None:
            return []
        names: list[str] = []
        for stmt in body.named_children:
            if stmt.type == "expression_statement":
                names.extend(self._assigned_names(stmt, receiver="self"))
        return names

    @staticmethod
    def _assigned_names(stmt: Node, receiver: str | None) -> list[str]:
        """Targets of ``x = ...`` / ``x: T`` (receiver None) or ``self.x = ...``."""
        names = []
        for child in stmt.named_children:
            if child.type != "assignment":
                continue
            left = child.child_by_field_name("left")
            if left is None:
                continue
            if receiver is None and left.type == "identifier":
                names.append(_text(left))
            elif (
                receiver is not None
                and left.type == "attribute"
                and _text(left.child_by_field_name("object")) == receiver
            ):
                names.append(_text(left.child_by_field_name("attribute")))
        return names
