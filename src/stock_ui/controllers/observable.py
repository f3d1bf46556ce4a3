"""
Minimal observable state container.

Controllers keep their state as an immutable snapshot and publish each new
snapshot to subscribers. The Reflex layer (or a test) subscribes and copies
what it needs; nothing reaches into a controller's internals.
"""

from typing import Callable, Generic, TypeVar

from stock_ui.lib import logs

LOG = logs.logger(__file__)

S = TypeVar("S")

Subscriber = Callable[[S], None]


class Observable(Generic[S]):
    """Holds a snapshot of type S and notifies subscribers when it changes."""

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> S:
        """The current snapshot."""
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for state changes.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _set_state(self, state: S) -> None:
        if state == self._state:
            return
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                LOG.exception("Subscriber %r failed", callback)
