"""Routing: compile flat path bindings into an ordered navigation tree.

Bindings are folded into a nested config tree, then compiled into
:class:`RouteNode` objects that an external router matches locations
against.
"""

from perch.routing.compiler import compile_config, compile_routes
from perch.routing.config_tree import ConfigNode, build_config
from perch.routing.route import FlatRoute, RouteNode, flatten_routes, walk_routes
from perch.routing.segments import Segment, SegmentKind, parse_segment, split_path

__all__ = [
    "ConfigNode",
    "FlatRoute",
    "RouteNode",
    "Segment",
    "SegmentKind",
    "build_config",
    "compile_config",
    "compile_routes",
    "flatten_routes",
    "parse_segment",
    "split_path",
    "walk_routes",
]
