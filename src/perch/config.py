"""Tree compilation configuration.

TreeConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from typing import Any

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class TreeConfig:
    """Naming conventions for compiling bindings into a route tree.

    All fields have sensible defaults. Override what you need::

        config = TreeConfig(root_prefix="/src/pages", suffixes=(".tsx", ".ts"))
    """

    # Bindings
    root_prefix: str = "/pages"  # Stripped from every binding path
    suffixes: tuple[str, ...] = (".py", ".tsx", ".ts")  # File extensions dropped from the last segment

    # Markers
    marker: str = "$"  # "$" alone is a layout, "$name" a page, "$[name]" a parameter
    index_name: str = "index"
    param_sigil: str = ":"

    # Compiled tree
    root_path: str = "/"  # Path of the synthetic top-level node

    # Loading
    export: str = "page"  # Attribute a page module exposes as its component
    placeholder: Any = None  # Rendered while an element is pending

    def __post_init__(self) -> None:
        if len(self.marker) != 1:
            msg = f"marker must be a single character, got {self.marker!r}"
            raise ConfigurationError(msg)
        if self.marker in ("/", "[", "]"):
            msg = f"marker {self.marker!r} collides with path syntax"
            raise ConfigurationError(msg)
        if not self.index_name:
            msg = "index_name must not be empty"
            raise ConfigurationError(msg)
        for suffix in self.suffixes:
            if not suffix.startswith(".") or len(suffix) < 2:
                msg = f"suffix must look like '.ext', got {suffix!r}"
                raise ConfigurationError(msg)
        if not self.root_path.startswith("/"):
            msg = f"root_path must start with '/', got {self.root_path!r}"
            raise ConfigurationError(msg)
