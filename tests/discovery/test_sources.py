"""Tests for discovery/sources.py."""

from __future__ import annotations

from pathlib import Path

from typeindex.discovery.sources import module_name, walk_python_sources


class TestWalkPythonSources:
    def test_given_tree_when_walked_then_sorted_python_files(self, tmp_path: Path) -> None:
        (tmp_path / "b.py").write_text("")
        (tmp_path / "a.pyi").write_text("")
        (tmp_path / "notes.txt").write_text("")
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "mod.py").write_text("")

        result = walk_python_sources(tmp_path)

        assert result == [tmp_path / "a.pyi", tmp_path / "b.py", tmp_path / "pkg" / "mod.py"]

    def test_given_excluded_dir_when_walked_then_pruned(self, tmp_path: Path) -> None:
        (tmp_path / "__pycache__").mkdir()
        (tmp_path / "__pycache__" / "cached.py").write_text("")
        (tmp_path / "keep.py").write_text("")

        result = walk_python_sources(tmp_path, ["__pycache__"])

        assert result == [tmp_path / "keep.py"]


class TestModuleName:
    def test_relative_path(self) -> None:
        assert module_name(Path("app/models/user.py")) == "app.models.user"

    def test_path_under_root(self) -> None:
        assert module_name(Path("/repo/app/models.py"), Path("/repo")) == "app.models"

    def test_package_init_names_package(self) -> None:
        assert module_name(Path("/repo/app/__init__.py"), Path("/repo")) == "app"

    def test_top_level_init_kept(self) -> None:
        assert module_name(Path("__init__.py")) == "__init__"

    def test_stub_file(self) -> None:
        assert module_name(Path("app/types.pyi")) == "app.types"

    def test_path_outside_root_uses_full_path(self) -> None:
        assert module_name(Path("/other/mod.py"), Path("/repo")) == "other.mod"

    def test_init_at_root_names_root_package(self) -> None:
        assert module_name(Path("/repo/app/__init__.py"), Path("/repo/app")) == "app"
