"""Static binding manifests.

A manifest is the build-time snapshot of a pages directory: a finite,
ordered list of binding paths and the page files behind them.  Shipping
a manifest removes the filesystem walk from startup, and loading one
checks every referenced file still exists::

    manifest = build_manifest("pages")
    manifest.dump("routes.json")

    bindings = load_manifest("routes.json").bindings()
    routes = compile_routes(bindings)

Format (JSON)::

    {
      "version": 1,
      "root": "/pages",
      "export": "page",
      "pages_dir": "pages",
      "entries": [{"path": "/pages/$index.py", "source": "$index.py"}]
    }

``pages_dir`` is relative to the manifest file; each ``source`` is
relative to ``pages_dir``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from perch.bindings import PathBinding
from perch.config import TreeConfig
from perch.errors import ConfigurationError
from perch.pages.discovery import binding_path, find_page_files
from perch.pages.loader import FileLoader

MANIFEST_VERSION = 1


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One binding: its path and the page file (relative to ``pages_dir``)."""

    path: str
    source: str


@dataclass(frozen=True, slots=True)
class Manifest:
    """An ordered, serialisable binding table.

    Attributes:
        pages_dir: Pages directory the sources are relative to.
        root: Root prefix the entry paths were generated with.
        export: Attribute each page module exposes as its component.
        entries: Bindings in discovery order.
        base_dir: Directory ``pages_dir`` is resolved against; the
            manifest file's directory once loaded.
    """

    pages_dir: str
    root: str = "/pages"
    export: str = "page"
    entries: tuple[ManifestEntry, ...] = ()
    base_dir: Path | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": MANIFEST_VERSION,
            "root": self.root,
            "export": self.export,
            "pages_dir": self.pages_dir,
            "entries": [{"path": e.path, "source": e.source} for e in self.entries],
        }

    def dumps(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"

    def dump(self, path: str | Path) -> None:
        """Write the manifest as JSON, with ``pages_dir`` relative to *path*."""
        target = Path(path)
        pages = Path(self.pages_dir)
        if self.base_dir is not None and not pages.is_absolute():
            pages = self.base_dir / pages
        relative = os.path.relpath(pages.resolve(), target.resolve().parent)
        rebased = Manifest(
            pages_dir=Path(relative).as_posix(),
            root=self.root,
            export=self.export,
            entries=self.entries,
        )
        target.write_text(rebased.dumps(), encoding="utf-8")

    def resolve_pages_dir(self) -> Path:
        pages = Path(self.pages_dir)
        if not pages.is_absolute() and self.base_dir is not None:
            pages = self.base_dir / pages
        return pages.resolve()

    def tree_config(self, base: TreeConfig | None = None) -> TreeConfig:
        """Return *base* (or the defaults) with this manifest's root and export."""
        return replace(base or TreeConfig(), root_prefix=self.root, export=self.export)

    def bindings(self) -> list[PathBinding]:
        """Bind every entry to a :class:`FileLoader`.

        Raises:
            ConfigurationError: If any referenced page file is missing.
        """
        pages = self.resolve_pages_dir()
        missing = [e.source for e in self.entries if not (pages / e.source).is_file()]
        if missing:
            listed = ", ".join(missing)
            msg = f"Manifest references missing page files under {pages}: {listed}"
            raise ConfigurationError(msg)
        return [
            PathBinding(path=e.path, loader=FileLoader(pages / e.source, export=self.export))
            for e in self.entries
        ]


def build_manifest(pages_dir: str | Path, config: TreeConfig | None = None) -> Manifest:
    """Snapshot a pages directory into a :class:`Manifest`."""
    config = config or TreeConfig()
    root = Path(pages_dir).resolve()
    entries = tuple(
        ManifestEntry(
            path=binding_path(file, root, config),
            source=file.relative_to(root).as_posix(),
        )
        for file in find_page_files(root, config)
    )
    return Manifest(
        pages_dir=str(root),
        root=config.root_prefix,
        export=config.export,
        entries=entries,
    )


def parse_manifest(data: Any, base_dir: Path | None = None) -> Manifest:
    """Validate decoded manifest JSON.

    Raises:
        ConfigurationError: On an unknown version or malformed fields.
    """
    if not isinstance(data, dict):
        msg = "Manifest must be a JSON object"
        raise ConfigurationError(msg)
    version = data.get("version")
    if version != MANIFEST_VERSION:
        msg = f"Unsupported manifest version {version!r} (expected {MANIFEST_VERSION})"
        raise ConfigurationError(msg)

    raw_entries = data.get("entries")
    if not isinstance(raw_entries, list):
        msg = "Manifest 'entries' must be a list"
        raise ConfigurationError(msg)

    entries: list[ManifestEntry] = []
    for raw in raw_entries:
        if not isinstance(raw, dict) or not isinstance(raw.get("path"), str) or not isinstance(raw.get("source"), str):
            msg = f"Malformed manifest entry: {raw!r}"
            raise ConfigurationError(msg)
        entries.append(ManifestEntry(path=raw["path"], source=raw["source"]))

    return Manifest(
        pages_dir=str(data.get("pages_dir", ".")),
        root=str(data.get("root", "/pages")),
        export=str(data.get("export", "page")),
        entries=tuple(entries),
        base_dir=base_dir,
    )


def load_manifest(path: str | Path) -> Manifest:
    """Read a manifest file written by :meth:`Manifest.dump`.

    Raises:
        ConfigurationError: If the file is not valid manifest JSON.
    """
    manifest_file = Path(path)
    try:
        data = json.loads(manifest_file.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        msg = f"Manifest {manifest_file} is not UTF-8 text: {exc}"
        raise ConfigurationError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Manifest {manifest_file} is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc
    return parse_manifest(data, base_dir=manifest_file.resolve().parent)
