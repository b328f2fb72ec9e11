"""Discovery module - produces TypeFacts for the registry.

Public API:
- TypeDiscovery: scans Python sources or fact files into an owned registry
- PythonTypeExtractor: tree-sitter based class extractor
- load_facts / write_export: JSON fact files
"""

from typeindex.discovery.fact_files import load_facts, write_export
from typeindex.discovery.ops import ScanResult, TypeDiscovery, inherits_from_any
from typeindex.discovery.python import PythonTypeExtractor
from typeindex.discovery.sources import module_name, walk_python_sources

__all__ = [
    "PythonTypeExtractor",
    "ScanResult",
    "TypeDiscovery",
    "inherits_from_any",
    "load_facts",
    "module_name",
    "walk_python_sources",
    "write_export",
]
