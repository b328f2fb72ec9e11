"""Type discovery - feeds a TypeRegistry from Python sources or fact files.

Scans run in two passes: every file is parsed first so the type parameters of
all classes are known, then facts are extracted. That lets
``class UserRepo(Repository[User])`` record ``Repository.T = User`` even when
``Repository`` lives in another module of the same tree.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from typeindex.config.models import DiscoveryConfig
from typeindex.core.errors import DiscoveryError
from typeindex.core.logging import clear_scan_id, get_logger, set_scan_id
from typeindex.discovery.fact_files import load_facts
from typeindex.discovery.python import PythonTypeExtractor
from typeindex.discovery.sources import module_name, walk_python_sources
from typeindex.registry.registry import TypeRegistry

if TYPE_CHECKING:
    from tree_sitter import Tree

    from typeindex.registry.models import TypeFact

log = get_logger(__name__)


@dataclass
class ScanResult:
    """Outcome of scanning a source tree."""

    facts: list[TypeFact] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: list[str] = field(default_factory=list)

    @property
    def type_names(self) -> list[str]:
        return [fact.name for fact in self.facts]


def inherits_from_any(
    fact: TypeFact,
    base_names: set[str],
    facts_by_name: dict[str, TypeFact],
) -> bool:
    """True if ``fact`` or any type up its superclass chain relates to a base.

    Relations of ancestors count, so ``Admin(User)`` with ``User(Model)``
    matches ``{"Model"}``. The chain walk stops at unknown names and cycles.
    """
    seen: set[str] = set()
    current: TypeFact | None = fact
    while current is not None and current.name not in seen:
        seen.add(current.name)
        if any(current.inherits_from(base) for base in base_names):
            return True
        if current.superclass is None:
            return False
        current = facts_by_name.get(current.superclass)
    return False


class TypeDiscovery:
    """Discovers types and registers them in an owned TypeRegistry.

    Usage::

        discovery = TypeDiscovery()
        discovery.analyze_directory(Path("src"))
        repos = discovery.registry.find_subclasses_of("Repository")
    """

    def __init__(
        self,
        config: DiscoveryConfig | None = None,
        registry: TypeRegistry | None = None,
    ) -> None:
        self.config = config or DiscoveryConfig()
        self.registry = registry if registry is not None else TypeRegistry()
        self._extractor = PythonTypeExtractor(self.config)
        # Type parameters of every class seen by this instance
        self._type_parameters: dict[str, tuple[str, ...]] = {}

    def analyze_source(self, source: str | bytes, library: str) -> list[TypeFact]:
        """Extract and register the classes of one module's source text."""
        tree = self._extractor.parse(source)
        self._type_parameters.update(self._extractor.declared_type_parameters(tree))
        facts = self._extractor.extract(tree, library, self._type_parameters)
        self.registry.register_all(facts)
        return facts

    def analyze_file(self, path: Path, root: Path | None = None) -> list[TypeFact]:
        """Extract and register the classes of one file.

        Raises:
            DiscoveryError: If the file cannot be read.
        """
        try:
            source = path.read_bytes()
        except OSError as e:
            raise DiscoveryError.source_unreadable(str(path), str(e)) from e
        return self.analyze_source(source, module_name(path, root))

    def analyze_directory(self, root: Path) -> ScanResult:
        """Register every class found under ``root``."""
        return self._scan(root, base_names=None)

    def analyze_for_bases(self, root: Path, base_names: Iterable[str]) -> ScanResult:
        """Register only types relating to one of ``base_names``.

        A type qualifies when it, or a type on its superclass chain, extends,
        implements or mixes in one of the bases. Cheaper to query afterwards
        than a full scan when only a few hierarchies matter.
        """
        return self._scan(root, base_names=set(base_names))

    def load_fact_file(self, path: Path) -> list[TypeFact]:
        """Register the facts stored in a JSON fact file."""
        facts = load_facts(path)
        self.registry.register_all(facts)
        return facts

    def clear(self) -> None:
        self.registry.clear()
        self._type_parameters.clear()

    def _scan(self, root: Path, base_names: set[str] | None) -> ScanResult:
        set_scan_id()
        result = ScanResult()
        try:
            parsed = self._parse_tree(root, result)
            candidates: list[TypeFact] = []
            for library, tree in parsed:
                candidates.extend(self._extractor.extract(tree, library, self._type_parameters))

            if base_names is not None:
                by_name = {fact.name: fact for fact in candidates}
                by_name.update({fact.name: fact for fact in self.registry})
                candidates = [
                    fact for fact in candidates if inherits_from_any(fact, base_names, by_name)
                ]

            self.registry.register_all(candidates)
            result.facts = candidates
            log.info(
                "scan_complete",
                root=str(root),
                files=result.files_scanned,
                skipped=len(result.files_skipped),
                types=len(candidates),
            )
        finally:
            clear_scan_id()
        return result

    def _parse_tree(self, root: Path, result: ScanResult) -> list[tuple[str, Tree]]:
        """Pass 1: parse every source and collect declared type parameters."""
        max_bytes = self.config.max_file_size_kb * 1024
        parsed: list[tuple[str, Tree]] = []

        for path in walk_python_sources(root, self.config.exclude_dirs):
            try:
                if path.stat().st_size > max_bytes:
                    log.debug("source_too_large", path=str(path))
                    result.files_skipped.append(str(path))
                    continue
                source = path.read_bytes()
            except OSError as e:
                log.warning("source_unreadable", path=str(path), error=str(e))
                result.files_skipped.append(str(path))
                continue

            tree = self._extractor.parse(source)
            self._type_parameters.update(self._extractor.declared_type_parameters(tree))
            parsed.append((module_name(path, root), tree))
            result.files_scanned += 1
            log.debug("source_parsed", path=str(path))

        return parsed
