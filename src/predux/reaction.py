"""Reactions — side effects driven by store changes.

Two flavors, both built on Store.subscribe():
- autorun(store, fn): calls fn(state) immediately and after every dispatch.
- reaction(store, select, effect): calls effect(value) only when
  select(state) returns something new.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")


class Reaction:
    """Handle for a store-driven side effect. Call dispose() to stop it."""

    __slots__ = ("_unsubscribe", "_disposed")

    def __init__(self) -> None:
        self._unsubscribe: Callable[[], None] | None = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Stop reacting. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Reaction({state})"


def autorun(store, fn: Callable[[Any], None]) -> Reaction:
    """Run fn(state) now, then again after every dispatch.

    Usage:
        log = []
        r = autorun(store, log.append)
        store.dispatch({"type": "INC"})
        r.dispose()
    """
    r = Reaction()

    def _run() -> None:
        if not r.disposed:
            fn(store.get_state())

    _run()
    r._unsubscribe = store.subscribe(_run)
    return r


def reaction(
    store,
    select: Callable[[Any], T],
    effect: Callable[[T], None],
    *,
    fire_immediately: bool = False,
) -> Reaction:
    """Call effect(value) whenever select(state) changes.

    A value counts as changed when it is neither the same object nor equal
    to the previous one.

    Usage:
        r = reaction(store, lambda s: s["count"], lambda n: print("count", n))
        store.dispatch({"type": "INC"})  # prints "count 1"
        r.dispose()
    """
    r = Reaction()
    last = select(store.get_state())

    def _run() -> None:
        nonlocal last
        if r.disposed:
            return
        value = select(store.get_state())
        if value is not last and value != last:
            last = value
            effect(value)

    if fire_immediately:
        effect(last)
    r._unsubscribe = store.subscribe(_run)
    return r
