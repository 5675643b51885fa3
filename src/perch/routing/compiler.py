"""Compile a config tree into the navigation tree a router consumes.

The result always has a single synthetic top-level node mounted at
``config.root_path`` that carries the root layout (if any) and holds
every other route as a child.  Sibling order follows insertion order
end to end, so the same bindings always compile to the same tree.

Usage::

    routes = compile_routes({
        "/pages/$index.py": load_home,
        "/pages/user/$[id].py": load_user,
    })
"""

from __future__ import annotations

import logging

from perch.bindings import BindingSource, PathBinding
from perch.config import TreeConfig
from perch.loading.deferred import DeferredElement, wrap
from perch.routing.config_tree import ConfigNode, build_config
from perch.routing.route import RouteNode

logger = logging.getLogger("perch.compiler")


def compile_routes(bindings: BindingSource, config: TreeConfig | None = None) -> list[RouteNode]:
    """Compile flat bindings into a navigation tree.

    Synchronous and side-effect free apart from constructing deferred
    elements, none of which load until activated.  A structural error
    aborts the whole compilation; partial trees are never returned.

    Raises:
        SegmentSyntaxError: On malformed marker syntax.
        AmbiguousNodeError: When two bindings claim the same key.
        ConfigurationError: When a binding is outside the pages root.
    """
    config = config or TreeConfig()
    root = build_config(bindings, config)
    routes = compile_config(root, config)
    logger.debug("Compiled route tree with %d top-level children", len(routes[0].children))
    return routes


def compile_config(root: ConfigNode, config: TreeConfig | None = None) -> list[RouteNode]:
    """Compile a root config node into the top-level route list."""
    config = config or TreeConfig()
    top = RouteNode(
        segment=config.root_path,
        element=_wrap(root.layout, config),
        children=tuple(_compile_entries(root, config)),
        layout=True,
        source=root.layout.path if root.layout else None,
    )
    return [top]


def _compile_entries(node: ConfigNode, config: TreeConfig) -> list[RouteNode]:
    """Compile the entries of one directory, in insertion order."""
    routes: list[RouteNode] = []
    for key, value in node.entries.items():
        if isinstance(value, PathBinding):
            is_index = key == config.index_name
            routes.append(
                RouteNode(
                    segment=None if is_index else key,
                    index=is_index,
                    element=_wrap(value, config),
                    source=value.path,
                )
            )
        else:
            routes.append(
                RouteNode(
                    segment=key,
                    element=_wrap(value.layout, config),
                    children=tuple(_compile_entries(value, config)),
                    layout=True,
                    source=value.layout.path if value.layout else None,
                )
            )
    return routes


def _wrap(binding: PathBinding | None, config: TreeConfig) -> DeferredElement | None:
    if binding is None:
        return None
    return wrap(binding.loader, placeholder=config.placeholder, source=binding.path)
