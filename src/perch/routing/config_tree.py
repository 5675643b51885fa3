"""Fold flat bindings into a nested, insertion-ordered config tree.

Each binding path is split into segments and walked like a trie insert:
every segment but the last names a directory (an interior node), and the
last one decides where the binding lands::

    /pages/$.py              -> root.layout
    /pages/$index.py         -> root.entries["index"]
    /pages/home/$.py         -> root.entries["home"].layout
    /pages/user/$[id].py     -> root.entries["user"].entries[":id"]

Collisions are errors.  The builder never decides which of two files
should win.
"""

from __future__ import annotations

import logging

from perch.bindings import BindingSource, PathBinding, normalize_bindings
from perch.config import TreeConfig
from perch.errors import AmbiguousNodeError
from perch.routing.segments import Segment, SegmentKind, split_path

logger = logging.getLogger("perch.compiler")


class ConfigNode:
    """A directory level in the config tree. Mutable during building only."""

    __slots__ = ("entries", "layout", "source")

    def __init__(self, source: str = "") -> None:
        # Child key -> leaf binding or nested directory, in insertion order
        self.entries: dict[str, PathBinding | ConfigNode] = {}
        # Binding attached to this directory itself ("$" file)
        self.layout: PathBinding | None = None
        # Binding path that first created this directory, for diagnostics
        self.source = source

    def __repr__(self) -> str:
        return f"ConfigNode(entries={list(self.entries)!r}, layout={self.layout is not None})"


def build_config(bindings: BindingSource, config: TreeConfig | None = None) -> ConfigNode:
    """Build the root config node from a binding source.

    Raises:
        SegmentSyntaxError: If a binding path has malformed marker syntax.
        AmbiguousNodeError: If two bindings claim the same key.
        ConfigurationError: If a binding is malformed or outside the root.
    """
    config = config or TreeConfig()
    root = ConfigNode(source=config.root_prefix)
    count = 0
    for binding in normalize_bindings(bindings):
        _insert(root, binding, split_path(binding.path, config), config)
        count += 1
    logger.debug("Built config tree from %d bindings", count)
    return root


def _insert(
    root: ConfigNode,
    binding: PathBinding,
    segments: list[Segment],
    config: TreeConfig,
) -> None:
    """Insert one binding, creating directories along the way."""
    node = root
    walked: list[str] = []

    for segment in segments[:-1]:
        key = segment.route_path(config.param_sigil)
        walked.append(key)
        existing = node.entries.get(key)
        if existing is None:
            child = ConfigNode(source=binding.path)
            node.entries[key] = child
            node = child
        elif isinstance(existing, PathBinding):
            raise AmbiguousNodeError("/".join(walked), existing.path, binding.path)
        else:
            node = existing

    last = segments[-1]

    if last.kind is SegmentKind.LAYOUT:
        if node.layout is not None:
            key = "/".join([*walked, config.marker])
            raise AmbiguousNodeError(key, node.layout.path, binding.path)
        node.layout = binding
        return

    if last.kind is SegmentKind.INDEX:
        key = config.index_name
    else:
        key = last.route_path(config.param_sigil)

    existing = node.entries.get(key)
    if existing is not None:
        other = existing.path if isinstance(existing, PathBinding) else existing.source
        raise AmbiguousNodeError("/".join([*walked, key]), other, binding.path)
    node.entries[key] = binding
