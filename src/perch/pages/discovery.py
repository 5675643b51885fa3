"""Filesystem binding discovery for the pages/ directory.

Walks the pages directory tree and collects every marker-prefixed page
file with a recognised suffix:

- ``$.py`` files become the layout of their directory
- ``$index.py`` files become the directory's index route
- ``$about.py`` files become the ``about`` route
- ``$[id].py`` files become the ``:id`` parameter route

Files without the marker, and directories starting with ``_`` or ``.``,
are ignored.  Files are visited before subdirectories, each in sorted
order, so the same tree always yields the same bindings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from perch.bindings import PathBinding
from perch.config import TreeConfig
from perch.pages.loader import FileLoader

logger = logging.getLogger("perch.pages")


def find_page_files(pages_dir: str | Path, config: TreeConfig | None = None) -> list[Path]:
    """Return page files below *pages_dir* in discovery order.

    Raises:
        FileNotFoundError: If *pages_dir* is not a directory.
    """
    config = config or TreeConfig()
    root = Path(pages_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Pages directory not found: {root}")

    files: list[Path] = []
    _walk_directory(root, config, files)
    logger.debug("Discovered %d page files under %s", len(files), root)
    return files


def _walk_directory(directory: Path, config: TreeConfig, files: list[Path]) -> None:
    """Recursively collect page files, files first, then subdirectories."""
    entries = sorted(directory.iterdir())

    for item in entries:
        if not item.is_file():
            continue
        if not item.name.startswith(config.marker):
            continue
        if item.suffix not in config.suffixes:
            continue
        files.append(item)

    for item in entries:
        if not item.is_dir():
            continue
        if item.name.startswith("_") or item.name.startswith("."):
            continue
        _walk_directory(item, config, files)


def binding_path(file: Path, root: Path, config: TreeConfig) -> str:
    """Map a page file to its binding path (``/pages/home/$index.py``)."""
    relative = file.relative_to(root).as_posix()
    prefix = config.root_prefix.rstrip("/")
    return f"{prefix}/{relative}"


def discover_bindings(pages_dir: str | Path, config: TreeConfig | None = None) -> list[PathBinding]:
    """Walk a pages directory and bind every page file to a :class:`FileLoader`.

    Args:
        pages_dir: Path to the ``pages/`` directory.
        config: Naming conventions; defaults to :class:`TreeConfig`.

    Returns:
        Bindings in discovery order, ready for ``compile_routes()``.
    """
    config = config or TreeConfig()
    root = Path(pages_dir).resolve()
    return [
        PathBinding(
            path=binding_path(file, root, config),
            loader=FileLoader(file, export=config.export),
        )
        for file in find_page_files(root, config)
    ]
