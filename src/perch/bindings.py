"""PathBinding frozen dataclass and binding-source normalisation.

A binding source is anything that yields ``(path, loader)`` pairs: a
hand-written table, a bundler-style glob mapping, or a manifest produced
by :mod:`perch.pages`.  Everything downstream sees a list of
:class:`PathBinding` in source order.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from perch._internal.types import Loader
from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class PathBinding:
    """A hierarchical path bound to a deferred component loader.

    Created once when the binding source is collected.
    """

    path: str
    loader: Loader


BindingSource = Mapping[str, Loader] | Iterable[PathBinding | tuple[str, Loader]]


def normalize_bindings(source: BindingSource) -> list[PathBinding]:
    """Turn any supported binding source into an ordered list of bindings.

    Accepts a mapping of ``{path: loader}`` (insertion order preserved),
    or an iterable of :class:`PathBinding` / ``(path, loader)`` tuples.

    Raises:
        ConfigurationError: If an entry is not a binding, a loader is not
            callable, or a path is not a string.
    """
    if isinstance(source, Mapping):
        items: Iterable[PathBinding | tuple[str, Loader]] = source.items()
    else:
        items = source

    bindings: list[PathBinding] = []
    for item in items:
        if isinstance(item, PathBinding):
            binding = item
        elif isinstance(item, tuple) and len(item) == 2:
            binding = PathBinding(path=item[0], loader=item[1])
        else:
            msg = f"Expected a PathBinding or (path, loader) pair, got {item!r}"
            raise ConfigurationError(msg)

        if not isinstance(binding.path, str):
            msg = f"Binding path must be a string, got {binding.path!r}"
            raise ConfigurationError(msg)
        if not callable(binding.loader):
            msg = f"Loader for {binding.path!r} is not callable"
            raise ConfigurationError(msg)
        bindings.append(binding)
    return bindings
