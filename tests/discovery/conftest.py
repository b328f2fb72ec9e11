"""Shared discovery fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def app_tree(tmp_path: Path) -> Path:
    """A small package spread over several modules."""
    root = tmp_path / "project"
    pkg = root / "app"
    pkg.mkdir(parents=True)
    (pkg / "__init__.py").write_text("")
    (pkg / "base.py").write_text(
        "from typing import Generic, TypeVar\n"
        "\n"
        "T = TypeVar('T')\n"
        "\n"
        "class Model:\n"
        "    id: int\n"
        "\n"
        "class Repository(Generic[T]):\n"
        "    def get(self, key: str) -> T:\n"
        "        ...\n"
    )
    (pkg / "models.py").write_text(
        "from app.base import Model\n"
        "\n"
        "class TimestampMixin:\n"
        "    created_at: str\n"
        "\n"
        "class User(TimestampMixin, Model, Serializable):\n"
        "    email: str\n"
        "\n"
        "class Admin(User):\n"
        "    pass\n"
        "\n"
        "class Product(Model):\n"
        "    pass\n"
    )
    (pkg / "repositories.py").write_text(
        "from app.base import Repository\n"
        "from app.models import User, Product\n"
        "\n"
        "class UserRepository(Repository[User]):\n"
        "    pass\n"
        "\n"
        "class ProductRepository(Repository[Product]):\n"
        "    pass\n"
    )
    (pkg / "utils.py").write_text("class Helper:\n    pass\n")

    excluded = root / ".venv" / "lib"
    excluded.mkdir(parents=True)
    (excluded / "site.py").write_text("class Vendored(Model):\n    pass\n")
    return root
