"""Deferred loading: explicit lifecycle for lazily materialised components.

Compiled route nodes carry a :class:`DeferredElement` per binding.  The
host activates elements when their nodes become active and renders
against the element's state.
"""

from perch.loading.activate import LoadOutcome, activate_chain
from perch.loading.deferred import DeferredElement, LoadState, wrap

__all__ = [
    "DeferredElement",
    "LoadOutcome",
    "LoadState",
    "activate_chain",
    "wrap",
]
