"""Source file discovery and module naming."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

PYTHON_SUFFIXES = (".py", ".pyi")


def walk_python_sources(root: Path, exclude_dirs: Iterable[str] = ()) -> list[Path]:
    """All Python sources under ``root``, pruning excluded directory names.

    Sorted by path so scans register facts in a stable order.
    """
    excluded = set(exclude_dirs)
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        for filename in filenames:
            if filename.endswith(PYTHON_SUFFIXES):
                found.append(Path(dirpath) / filename)
    return sorted(found)


def module_name(path: Path, root: Path | None = None) -> str:
    """Convert a source path to a dotted module name.

    Examples:
        >>> module_name(Path("app/models/user.py"))
        'app.models.user'
        >>> module_name(Path("/repo/app/__init__.py"), Path("/repo"))
        'app'
        >>> module_name(Path("/repo/setup.py"), Path("/repo"))
        'setup'
        >>> module_name(Path("/repo/app/__init__.py"), Path("/repo/app"))
        'app'
    """
    source = path
    if root is not None:
        try:
            path = path.relative_to(root)
        except ValueError:
            pass
    parts = list(path.with_suffix("").parts)
    if parts and parts[0] == path.anchor:
        parts = parts[1:]
    # Package __init__ names the package itself
    if parts and parts[-1] == "__init__":
        if len(parts) > 1:
            parts = parts[:-1]
        elif source.parent.name:
            # __init__ at the scan root names the root package
            parts = [source.parent.name]
    return ".".join(parts)
