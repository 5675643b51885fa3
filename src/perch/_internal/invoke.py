"""Invoke helpers: call sync or async loaders uniformly.

Loaders can be ``def`` or ``async def`` (or return any awaitable). Any
code that calls a user-provided loader must handle both cases. This
module provides a single helper so the sync/async check lives in exactly
one place.

Usage::

    from perch._internal.invoke import invoke

    component = await invoke(loader)
"""

import inspect
from typing import Any


async def invoke(loader: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a loader and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns the component directly
        def load_home():
            return HomePage

        # async: returns a coroutine, awaited automatically
        async def load_home():
            module = await import_later("pages.home")
            return module.page
    """
    result = loader(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
