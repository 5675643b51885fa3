"""Loaders that import a page module from a file on first activation."""

from __future__ import annotations

import importlib.util
import re
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

import anyio.to_thread

# Characters not allowed in a module name ("$[id]" -> "__id_")
_UNSAFE_RE = re.compile(r"\W")


def _load_module(source: Path) -> ModuleType:
    """Execute *source* in a private module namespace.

    The module is not registered in ``sys.modules``, so each loader owns
    its module and page files need not be importable package members.
    """
    module_name = "_perch_page_" + _UNSAFE_RE.sub("_", source.stem) + f"_{abs(hash(source))}"
    spec = importlib.util.spec_from_file_location(module_name, source)
    if spec is None or spec.loader is None:
        msg = f"Cannot load a module from {source}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@dataclass(frozen=True, slots=True)
class FileLoader:
    """Deferred loader for a page file.

    Calling the loader imports the file in a worker thread (so module
    execution never blocks the event loop) and returns its ``export``
    attribute::

        loader = FileLoader(Path("pages/home/$index.py"))
        component = await loader()
    """

    source: Path
    export: str = "page"

    async def __call__(self) -> Any:
        module = await anyio.to_thread.run_sync(_load_module, self.source)
        try:
            return getattr(module, self.export)
        except AttributeError:
            msg = f"{self.source} does not export {self.export!r}"
            raise AttributeError(msg) from None
