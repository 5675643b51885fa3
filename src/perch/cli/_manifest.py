"""``perch manifest``: snapshot a pages directory as JSON.

Writes the manifest to ``--output`` (with ``pages_dir`` relative to the
output file) or prints it to stdout.
"""

import argparse
import sys

from perch.config import TreeConfig
from perch.pages.manifest import build_manifest


def run_manifest(args: argparse.Namespace) -> None:
    """Build a manifest for ``args.pages_dir``."""
    config = TreeConfig(root_prefix=args.root) if args.root is not None else TreeConfig()
    try:
        manifest = build_manifest(args.pages_dir, config)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.output is None:
        sys.stdout.write(manifest.dumps())
        return

    manifest.dump(args.output)
    print(f"Wrote {len(manifest.entries)} entries to {args.output}")
