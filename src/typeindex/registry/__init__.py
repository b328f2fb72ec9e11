"""Type registry - fact model, reverse indexes, queries and views.

Public API:
- TypeRegistry: ingestion, relation queries, traversal, export/rendering
- TypeFact, MethodFact: immutable fact records
- Relation: superclass / interface / mixin edge kinds
"""

from typeindex.registry.models import MethodFact, Relation, TypeFact, qualified_key
from typeindex.registry.registry import TypePredicate, TypeRegistry

__all__ = [
    "MethodFact",
    "Relation",
    "TypeFact",
    "TypePredicate",
    "TypeRegistry",
    "qualified_key",
]
