"""Activate the elements of an active route chain concurrently.

The external router resolves a location to a chain of route nodes
(outermost layout first).  The host then materialises every element on
that chain; this helper does so in one anyio task group so the loads
overlap, and keeps each failure local to its own node::

    chain = router.resolve("/user/42")       # [root, user, :id]
    outcomes = await activate_chain(chain)
    for outcome in outcomes:
        if outcome.error is not None:
            show_error_boundary(outcome.node, outcome.error)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import anyio

from perch.errors import LoadError

if TYPE_CHECKING:
    from perch.routing.route import RouteNode


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    """Result of activating one node's element."""

    node: RouteNode
    component: Any = None
    error: LoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def activate_chain(nodes: Sequence[RouteNode]) -> list[LoadOutcome]:
    """Activate every element on *nodes*, returning outcomes in chain order.

    A node without an element yields an outcome with ``component=None``.
    A ``LoadError`` is captured in that node's outcome and never cancels
    the sibling loads.  Cancelling the caller cancels all loads, which
    leaves their elements pending.
    """
    outcomes: list[LoadOutcome | None] = [None] * len(nodes)

    async def _activate(position: int, node: RouteNode) -> None:
        if node.element is None:
            outcomes[position] = LoadOutcome(node)
            return
        try:
            component = await node.element.activate()
        except LoadError as exc:
            outcomes[position] = LoadOutcome(node, error=exc)
            return
        outcomes[position] = LoadOutcome(node, component=component)

    async with anyio.create_task_group() as tg:
        for position, node in enumerate(nodes):
            tg.start_soon(_activate, position, node)

    return [outcome for outcome in outcomes if outcome is not None]
