"""Shared CLI fixtures."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Run each command from an empty directory with no global config."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    with patch("typeindex.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
        yield workdir
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def sources(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    pkg = root / "app"
    pkg.mkdir(parents=True)
    (pkg / "__init__.py").write_text("")
    (pkg / "models.py").write_text(
        "from typing import Generic, TypeVar\n"
        "\n"
        "T = TypeVar('T')\n"
        "\n"
        "class Model:\n"
        "    pass\n"
        "\n"
        "class User(Model, Serializable):\n"
        "    pass\n"
        "\n"
        "class Admin(User):\n"
        "    pass\n"
        "\n"
        "class Product(LoggingMixin, Model):\n"
        "    pass\n"
        "\n"
        "class Repository(Generic[T]):\n"
        "    pass\n"
        "\n"
        "class UserRepository(Repository[User]):\n"
        "    pass\n"
    )
    return root
