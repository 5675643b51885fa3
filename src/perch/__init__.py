"""Perch: compile page files into a navigation tree.

Turns a flat set of path bindings (``/pages/home/$index.py`` -> loader)
into an ordered tree of route nodes whose elements load lazily.

Basic usage::

    from perch import compile_routes

    routes = compile_routes({
        "/pages/$.py": load_shell,
        "/pages/$index.py": load_home,
        "/pages/user/$[id].py": load_user,
    })

From a pages directory::

    from perch import compile_routes, discover_bindings

    routes = compile_routes(discover_bindings("pages"))
"""

import importlib

__version__ = "0.1.0.dev0"
__all__ = [
    "AmbiguousNodeError",
    "ConfigurationError",
    "DeferredElement",
    "FileLoader",
    "LoadError",
    "LoadState",
    "PathBinding",
    "PerchError",
    "RouteNode",
    "SegmentSyntaxError",
    "TreeConfig",
    "activate_chain",
    "compile_routes",
    "discover_bindings",
    "flatten_routes",
    "load_manifest",
    "wrap",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AmbiguousNodeError": "perch.errors",
    "ConfigurationError": "perch.errors",
    "DeferredElement": "perch.loading.deferred",
    "FileLoader": "perch.pages.loader",
    "LoadError": "perch.errors",
    "LoadState": "perch.loading.deferred",
    "PathBinding": "perch.bindings",
    "PerchError": "perch.errors",
    "RouteNode": "perch.routing.route",
    "SegmentSyntaxError": "perch.errors",
    "TreeConfig": "perch.config",
    "activate_chain": "perch.loading.activate",
    "compile_routes": "perch.routing.compiler",
    "discover_bindings": "perch.pages.discovery",
    "flatten_routes": "perch.routing.route",
    "load_manifest": "perch.pages.manifest",
    "wrap": "perch.loading.deferred",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_path), name)
