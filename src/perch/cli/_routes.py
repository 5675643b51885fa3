"""``perch routes``: print the compiled route tree.

Resolves a pages directory or manifest, compiles it, and prints one line
per node with its URL path, role, and source file.
"""

import argparse
import sys
from collections.abc import Sequence

from perch.cli._resolve import resolve_bindings
from perch.errors import PerchError
from perch.routing.compiler import compile_routes
from perch.routing.route import RouteNode, walk_routes


def _label(node: RouteNode) -> str:
    if node.index:
        return "(index)"
    return node.segment or ""


def _role(node: RouteNode) -> str:
    if node.layout:
        return "layout" if node.element is not None else "-"
    return "index" if node.index else "page"


def format_tree(routes: Sequence[RouteNode]) -> list[str]:
    """Render a route tree as aligned text rows.

    Each row is ``<indented segment>  <url path>  <role>  <source>``.
    """
    rows: list[tuple[str, str, str, str]] = []
    for depth, url_path, node in walk_routes(routes):
        rows.append(("  " * depth + _label(node), url_path, _role(node), node.source or ""))

    max_label = max(max(len(r[0]) for r in rows), 5)  # "ROUTE" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header
    fmt = f"{{:<{max_label}}}  {{:<{max_path}}}  {{:<6}}  {{}}"

    lines = [fmt.format("ROUTE", "PATH", "ROLE", "SOURCE").rstrip()]
    lines.append("-" * min(max_label + max_path + 10 + max(len(r[3]) for r in rows), 80))
    lines.extend(fmt.format(*row).rstrip() for row in rows)
    return lines


def run_routes(args: argparse.Namespace) -> None:
    """Print the route tree for ``args.target``.

    Exits with code 1 when the target cannot be read or compiled.
    """
    try:
        bindings, config = resolve_bindings(args.target, args.root)
        routes = compile_routes(bindings, config)
    except (FileNotFoundError, PerchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not bindings:
        print("No pages found.")
        return

    for line in format_tree(routes):
        print(line)
