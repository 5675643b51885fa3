"""Tests for perch.pages.discovery and perch.pages.loader."""

from pathlib import Path

import pytest

from perch.config import TreeConfig
from perch.errors import LoadError
from perch.loading.deferred import LoadState
from perch.pages.discovery import discover_bindings, find_page_files
from perch.pages.loader import FileLoader
from perch.routing.compiler import compile_routes


class TestFindPageFiles:
    def test_discovery_order(self, pages_dir: Path) -> None:
        files = [f.relative_to(pages_dir).as_posix() for f in find_page_files(pages_dir)]
        assert files == [
            "$.py",
            "$about.py",
            "$index.py",
            "settings/$.py",
            "settings/$index.py",
            "user/$[id].py",
        ]

    def test_skips_unmarked_and_private(self, pages_dir: Path) -> None:
        names = {f.name for f in find_page_files(pages_dir)}
        assert "helpers.py" not in names
        files = find_page_files(pages_dir)
        assert not any("_private" in f.parts or ".cache" in f.parts for f in files)

    def test_suffix_filter(self, pages_dir: Path) -> None:
        (pages_dir / "$notes.md").write_text("# notes\n", encoding="utf-8")
        (pages_dir / "$widget.tsx").write_text("export default 1\n", encoding="utf-8")
        names = {f.name for f in find_page_files(pages_dir)}
        assert "$notes.md" not in names
        assert "$widget.tsx" in names
        names = {f.name for f in find_page_files(pages_dir, TreeConfig(suffixes=(".py",)))}
        assert "$widget.tsx" not in names

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Pages directory not found"):
            find_page_files(tmp_path / "nope")


class TestDiscoverBindings:
    def test_binding_paths(self, pages_dir: Path) -> None:
        paths = [b.path for b in discover_bindings(pages_dir)]
        assert paths[0] == "/pages/$.py"
        assert "/pages/user/$[id].py" in paths

    def test_custom_root(self, pages_dir: Path) -> None:
        paths = [b.path for b in discover_bindings(pages_dir, TreeConfig(root_prefix="/src/pages"))]
        assert all(p.startswith("/src/pages/") for p in paths)

    def test_loaders_are_file_loaders(self, pages_dir: Path) -> None:
        binding = discover_bindings(pages_dir)[0]
        assert isinstance(binding.loader, FileLoader)
        assert binding.loader.source == (pages_dir / "$.py").resolve()

    def test_compiles(self, pages_dir: Path) -> None:
        top = compile_routes(discover_bindings(pages_dir))[0]
        assert top.source == "/pages/$.py"
        labels = [(c.segment, c.index) for c in top.children]
        assert labels == [("about", False), (None, True), ("settings", False), ("user", False)]


class TestFileLoader:
    @pytest.mark.anyio
    async def test_loads_export(self, pages_dir: Path) -> None:
        loader = FileLoader(pages_dir / "$index.py")
        assert await loader() == "home"

    @pytest.mark.anyio
    async def test_custom_export(self, tmp_path: Path) -> None:
        source = tmp_path / "$index.py"
        source.write_text("component = 42\n", encoding="utf-8")
        assert await FileLoader(source, export="component")() == 42

    @pytest.mark.anyio
    async def test_missing_export(self, tmp_path: Path) -> None:
        source = tmp_path / "$index.py"
        source.write_text("other = 1\n", encoding="utf-8")
        with pytest.raises(AttributeError, match="does not export 'page'"):
            await FileLoader(source)()

    @pytest.mark.anyio
    async def test_import_error_becomes_load_error(self, pages_dir: Path) -> None:
        (pages_dir / "$broken.py").write_text("raise RuntimeError('bad page')\n", encoding="utf-8")
        routes = compile_routes(discover_bindings(pages_dir))
        broken = next(c for c in routes[0].children if c.segment == "broken")
        assert broken.element is not None

        with pytest.raises(LoadError, match="bad page"):
            await broken.element.activate()
        assert broken.element.state is LoadState.FAILED

    @pytest.mark.anyio
    async def test_element_activation_end_to_end(self, pages_dir: Path) -> None:
        routes = compile_routes(discover_bindings(pages_dir))
        user = next(c for c in routes[0].children if c.segment == "user")
        profile = user.children[0]
        assert profile.segment == ":id"
        assert profile.element is not None
        assert await profile.element.activate() == "profile"
