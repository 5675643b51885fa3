"""``perch check``: structural validation command.

Compiles a pages directory or manifest without loading any page, and
reports the first structural error.  Exits with code 1 on failure.
"""

import argparse
import sys

from perch.cli._resolve import resolve_bindings
from perch.errors import PerchError
from perch.routing.compiler import compile_routes
from perch.routing.route import walk_routes


def run_check(args: argparse.Namespace) -> None:
    """Validate the page tree behind ``args.target``."""
    try:
        bindings, config = resolve_bindings(args.target, args.root)
        routes = compile_routes(bindings, config)
    except (FileNotFoundError, PerchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    nodes = sum(1 for _ in walk_routes(routes))
    print(f"OK: {len(bindings)} bindings compiled into {nodes} route nodes.")
