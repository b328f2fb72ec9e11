"""typeindex - build-time type-relationship index for code generators.

Register facts about declared types, then ask who extends, implements or
mixes in what::

    from typeindex import TypeDiscovery

    discovery = TypeDiscovery()
    discovery.analyze_directory(Path("src"))
    for fact in discovery.registry.find_all_descendants_of("Model"):
        ...
"""

from typeindex.discovery import TypeDiscovery
from typeindex.registry import MethodFact, Relation, TypeFact, TypeRegistry

__version__ = "0.1.0"

__all__ = [
    "MethodFact",
    "Relation",
    "TypeDiscovery",
    "TypeFact",
    "TypeRegistry",
    "__version__",
]
