"""Deferred component loading: explicit pending/ready/failed lifecycle.

Each compiled route node carries a :class:`DeferredElement` that wraps
its loader.  Nothing loads at compile time.  The host runtime activates
an element when its node becomes part of the active view, renders the
placeholder while it is pending, and re-renders when notified::

    element = wrap(load_home, placeholder=Spinner)
    unsubscribe = element.subscribe(lambda el: host.invalidate())

    element.render()            # Spinner (pending)
    await element.activate()    # runs load_home once
    element.render()            # the component

Lifecycle:

    PENDING --activate--> (in flight) --ok-----> READY(component)
                               |      --error--> FAILED(LoadError)
                               +--all activations cancelled--> PENDING

Guarantees:

- Single flight: concurrent activations share one in-flight load.
- Terminal states: READY and FAILED never regress.
- Cancellation: when the activating task is cancelled (the node was
  deactivated), a late result is discarded.  State, subscribers and
  error reporting are untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import anyio
import anyio.lowlevel

from perch._internal.invoke import invoke
from perch._internal.types import Loader, Subscriber
from perch.errors import LoadError

logger = logging.getLogger("perch.loading")


class LoadState(Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class DeferredElement:
    """A lazily materialised component with an observable lifecycle.

    Not thread-safe: all transitions happen on the event loop that
    activates the element.
    """

    __slots__ = (
        "_component",
        "_error",
        "_inflight",
        "_subscribers",
        "load_attempts",
        "loader",
        "placeholder",
        "source",
        "state",
    )

    def __init__(self, loader: Loader, *, placeholder: Any = None, source: str | None = None) -> None:
        self.loader = loader
        self.placeholder = placeholder
        self.source = source
        self.state = LoadState.PENDING
        # Number of times the loader has been invoked
        self.load_attempts = 0
        self._component: Any = None
        self._error: LoadError | None = None
        self._inflight: anyio.Event | None = None
        self._subscribers: list[Subscriber] = []

    def __repr__(self) -> str:
        return f"<DeferredElement {self.source or self.loader!r} {self.state.value}>"

    @property
    def component(self) -> Any:
        """The loaded component, or ``None`` unless READY."""
        return self._component

    @property
    def error(self) -> LoadError | None:
        """The load failure, or ``None`` unless FAILED."""
        return self._error

    @property
    def loading(self) -> bool:
        """True while a load is in flight."""
        return self._inflight is not None

    def render(self) -> Any:
        """Return what the host should display right now.

        The component when READY, the placeholder while PENDING.

        Raises:
            LoadError: If the element FAILED.  The host catches this at
                the element's own boundary.
        """
        if self.state is LoadState.READY:
            return self._component
        if self._error is not None:
            raise self._error
        return self.placeholder

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for terminal transitions.

        The callback receives this element once it becomes READY or
        FAILED.  Returns a zero-argument function that unsubscribes.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def activate(self) -> Any:
        """Materialise the component, loading it at most once.

        Returns:
            The component produced by the loader.

        Raises:
            LoadError: If the loader failed (now or on an earlier
                activation).
        """
        while True:
            if self.state is LoadState.READY:
                return self._component
            if self._error is not None:
                raise self._error

            inflight = self._inflight
            if inflight is not None:
                # Another activation owns the load; wait for its outcome.
                # If that activation is cancelled, loop and take over.
                await inflight.wait()
                continue

            await self._load()

    async def _load(self) -> None:
        done = anyio.Event()
        self._inflight = done
        self.load_attempts += 1
        try:
            try:
                component = await invoke(self.loader)
                # A load that finished after deactivation must not commit
                await anyio.lowlevel.checkpoint_if_cancelled()
            except anyio.get_cancelled_exc_class():
                logger.debug("Discarded load of %s after deactivation", self.source or self.loader)
                raise
            except Exception as exc:
                error = LoadError(self.source, exc)
                error.__cause__ = exc
                logger.warning("%s", error)
                self._settle(LoadState.FAILED, error=error)
            else:
                self._settle(LoadState.READY, component=component)
        finally:
            self._inflight = None
            done.set()

    def _settle(self, state: LoadState, *, component: Any = None, error: LoadError | None = None) -> None:
        # FAILED is recorded only together with its error
        self._component = component
        self._error = error
        self.state = state
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception:
                logger.exception("Subscriber %r failed for %s", callback, self.source or self.loader)


def wrap(loader: Loader, *, placeholder: Any = None, source: str | None = None) -> DeferredElement:
    """Wrap *loader* in a fresh, pending :class:`DeferredElement`."""
    return DeferredElement(loader, placeholder=placeholder, source=source)
