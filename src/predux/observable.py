"""Observable interop — expose a store as a subscribe-only state stream.

Reactive libraries look up the OBSERVABLE attribute on a source and call it
to get an object with subscribe(observer). The observer's next() receives the
current state immediately and again after every dispatch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from predux.errors import InvalidObserver

if TYPE_CHECKING:
    from predux.store import Store

OBSERVABLE = "__observable__"


class Subscription:
    """Handle returned by StoreObservable.subscribe()."""

    __slots__ = ("_unsubscribe", "_closed")

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()


class StoreObservable:
    """Subscribe-only view of a store's state."""

    __slots__ = ("_store",)

    def __init__(self, store: Store) -> None:
        self._store = store

    def subscribe(self, observer) -> Subscription:
        """Push the current state to observer.next now and after every dispatch."""
        if observer is None or callable(observer) or isinstance(observer, (str, bytes, int, float, bool)):
            raise InvalidObserver("Expected the observer to be an object.")

        def _observe_state() -> None:
            next_fn = getattr(observer, "next", None)
            if next_fn is not None:
                next_fn(self._store.get_state())

        _observe_state()
        return Subscription(self._store.subscribe(_observe_state))

    def __observable__(self) -> StoreObservable:
        return self

    def __repr__(self) -> str:
        return f"StoreObservable({self._store!r})"
