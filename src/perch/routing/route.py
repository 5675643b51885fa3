"""RouteNode and FlatRoute frozen dataclasses, plus tree walkers."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from perch._internal.types import Loader
    from perch.loading.deferred import DeferredElement


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A node of the compiled navigation tree.

    Index:   ``RouteNode(index=True, element=...)``        (no segment)
    Page:    ``RouteNode(segment="about", element=...)``
    Param:   ``RouteNode(segment=":id", element=...)``
    Layout:  ``RouteNode(segment="home", element=..., children=(...), layout=True)``

    A node whose ``element`` is ``None`` renders only its children.

    Attributes:
        segment: Path segment matched by this node; ``None`` for index nodes.
        index: True when the node is its parent's index route.
        element: Deferred element materialised when the node is active.
        children: Child nodes in source order.
        layout: True when the node was compiled from a directory, so its
            element (if any) wraps its children.
        source: Binding path that supplied ``element``.
    """

    segment: str | None = None
    index: bool = False
    element: DeferredElement | None = None
    children: tuple[RouteNode, ...] = ()
    layout: bool = False
    source: str | None = None


@dataclass(frozen=True, slots=True)
class FlatRoute:
    """One binding recovered from a compiled tree."""

    url_path: str
    role: Literal["page", "index", "layout"]
    source: str | None
    loader: Loader


def join_path(base: str, segment: str | None) -> str:
    """Append *segment* to a URL path (``None`` keeps *base*)."""
    if segment is None:
        return base
    if segment.startswith("/"):
        return segment
    return base.rstrip("/") + "/" + segment


def walk_routes(routes: Sequence[RouteNode], base: str = "") -> Iterator[tuple[int, str, RouteNode]]:
    """Yield ``(depth, url_path, node)`` depth-first, parents before children."""
    stack: list[tuple[int, str, RouteNode]] = [(0, join_path(base or "/", r.segment), r) for r in reversed(routes)]
    while stack:
        depth, url_path, node = stack.pop()
        yield depth, url_path, node
        for child in reversed(node.children):
            stack.append((depth + 1, join_path(url_path, child.segment), child))


def flatten_routes(routes: Sequence[RouteNode]) -> list[FlatRoute]:
    """Recover every binding from a compiled tree.

    Each element appears exactly once, tagged with the role it plays.
    Nodes without an element contribute nothing.
    """
    flat: list[FlatRoute] = []
    for _depth, url_path, node in walk_routes(routes):
        if node.element is None:
            continue
        if node.layout:
            role: Literal["page", "index", "layout"] = "layout"
        elif node.index:
            role = "index"
        else:
            role = "page"
        flat.append(FlatRoute(url_path, role, node.source, node.element.loader))
    return flat
