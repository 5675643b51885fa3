"""Perch CLI: inspect, snapshot, and validate page trees.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="perch: compile page files into a navigation tree.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Print the compiled route tree")
    routes_parser.add_argument("target", help="Pages directory or manifest file")
    routes_parser.add_argument("--root", default=None, help="Binding root prefix (default: /pages)")

    # -- perch manifest ---------------------------------------------------
    manifest_parser = subparsers.add_parser("manifest", help="Write a static binding manifest")
    manifest_parser.add_argument("pages_dir", help="Pages directory to snapshot")
    manifest_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Manifest file to write (default: stdout)",
    )
    manifest_parser.add_argument("--root", default=None, help="Binding root prefix (default: /pages)")

    # -- perch check ------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a page tree")
    check_parser.add_argument("target", help="Pages directory or manifest file")
    check_parser.add_argument("--root", default=None, help="Binding root prefix (default: /pages)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "manifest":
        from perch.cli._manifest import run_manifest

        run_manifest(args)
    elif args.command == "check":
        from perch.cli._check import run_check

        run_check(args)
