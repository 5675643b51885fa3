"""Shared type aliases used across perch modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Deferred loader: zero-argument callable producing a component, sync or async
Loader: TypeAlias = Callable[[], Awaitable[Any] | Any]

# State-change callback: receives the element that transitioned
Subscriber: TypeAlias = Callable[[Any], None]
