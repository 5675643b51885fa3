"""Binding source resolution: turns a CLI target into bindings.

Shared utility used by ``perch routes`` and ``perch check``.  A
directory is walked with :func:`discover_bindings`; a file is read as a
manifest.
"""

from pathlib import Path

from perch.bindings import PathBinding
from perch.config import TreeConfig
from perch.pages.discovery import discover_bindings
from perch.pages.manifest import load_manifest


def resolve_bindings(target: str, root: str | None = None) -> tuple[list[PathBinding], TreeConfig]:
    """Resolve a pages directory or manifest path to bindings.

    Args:
        target: A pages directory or a manifest JSON file.
        root: Binding root prefix override.  Manifests carry their own
            root, which wins when no override is given.

    Returns:
        The bindings and the config to compile them with.

    Raises:
        FileNotFoundError: If *target* does not exist.
        ConfigurationError: If the manifest is malformed or stale.
    """
    path = Path(target)
    if path.is_dir():
        config = TreeConfig(root_prefix=root) if root is not None else TreeConfig()
        return discover_bindings(path, config), config

    if path.is_file():
        manifest = load_manifest(path)
        config = manifest.tree_config()
        if root is not None:
            config = TreeConfig(root_prefix=root, export=config.export)
        return manifest.bindings(), config

    msg = f"No pages directory or manifest at {target}"
    raise FileNotFoundError(msg)
