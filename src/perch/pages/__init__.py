"""Filesystem-based binding collection.

The ``pages/`` directory structure defines the navigation tree.  Page
files are named with the ``$`` marker so plain helper modules can live
alongside them.

Usage::

    bindings = discover_bindings("pages")
    routes = compile_routes(bindings)

Conventions:

    pages/
      $.py             # Root layout
      $index.py        # /
      home/
        $.py           # Layout wrapping everything under /home
        $index.py      # /home
        $settings.py   # /home/settings
      user/
        $[id].py       # /user/:id
      widgets.py       # ignored (no marker)
"""

from perch.pages.discovery import discover_bindings, find_page_files
from perch.pages.loader import FileLoader
from perch.pages.manifest import Manifest, ManifestEntry, build_manifest, load_manifest

__all__ = [
    "FileLoader",
    "Manifest",
    "ManifestEntry",
    "build_manifest",
    "discover_bindings",
    "find_page_files",
    "load_manifest",
]
