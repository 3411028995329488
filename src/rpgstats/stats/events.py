"""Synchronous in-process events."""

from collections.abc import Callable
from typing import Any


class Event:
    """
    Ordered multicast notification.

    Handlers run synchronously on the caller's thread, in the order they were
    subscribed. Exceptions raised by a handler propagate to the caller of
    :meth:`emit` and stop delivery to the remaining handlers.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[..., Any]] = []

    def subscribe(self, handler: Callable[..., Any]) -> None:
        """Add a handler. Subscribing the same handler twice is a no-op."""
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: Callable[..., Any]) -> None:
        """Remove a handler if present."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: Any) -> None:
        """Invoke every handler with ``args``."""
        # Handlers may unsubscribe themselves while being notified
        for handler in list(self._handlers):
            handler(*args)

    def __contains__(self, handler: object) -> bool:
        return handler in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"Event({self.name!r}, handlers={len(self._handlers)})"
