"""Store — the single state cell, changed only by dispatching actions.

A Store owns the current state, the reducer that computes the next state,
and the listener registry. dispatch() runs the reducer under a guard that
forbids reentrant dispatch, then notifies a snapshot of the listeners.

Listener registry is copy-on-write: taking a snapshot for a notification pass
marks the list shared, and the next subscribe/unsubscribe clones it first, so
an in-flight pass never sees structural changes.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, Protocol, TypeVar, runtime_checkable

from predux.action import Action, ActionTypes, is_plain_object
from predux.errors import (
    InvalidAction,
    InvalidEnhancer,
    InvalidListener,
    InvalidReducer,
    ReentrantDispatch,
)
from predux.observable import StoreObservable

S = TypeVar("S")

Reducer = Callable[[Any, Action], Any]
Listener = Callable[[], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class StoreLike(Protocol):
    """What create_store() returns, with or without enhancers."""

    def dispatch(self, action: Action) -> Any: ...

    def get_state(self) -> Any: ...

    def subscribe(self, listener: Listener) -> Unsubscribe: ...

    def replace_reducer(self, next_reducer: Reducer) -> Any: ...

    def observable(self) -> StoreObservable: ...


StoreCreator = Callable[..., StoreLike]
Enhancer = Callable[[StoreCreator], StoreCreator]


class _ListenerRegistry:
    """Ordered listeners with a clone-on-first-mutation snapshot."""

    __slots__ = ("_listeners", "_shared")

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._shared = False

    def _ensure_can_mutate(self) -> None:
        if self._shared:
            self._listeners = list(self._listeners)
            self._shared = False

    def add(self, listener: Listener) -> None:
        self._ensure_can_mutate()
        self._listeners.append(listener)

    def remove(self, listener: Listener) -> None:
        self._ensure_can_mutate()
        self._listeners.remove(listener)

    def snapshot(self) -> list[Listener]:
        """Freeze the current list for one notification pass."""
        self._shared = True
        return self._listeners

    def __len__(self) -> int:
        return len(self._listeners)


class Store(Generic[S]):
    """Holds the state tree. Use create_store() to build one with enhancers."""

    def __init__(self, reducer: Reducer, preloaded_state: S | None = None) -> None:
        if not callable(reducer):
            raise InvalidReducer("Expected the reducer to be a function.")

        self._reducer = reducer
        self._state = preloaded_state
        self._listeners = _ListenerRegistry()
        self._is_dispatching = False

        # Every reducer returns its initial state for INIT, populating the tree.
        self.dispatch({"type": ActionTypes.INIT})

    def get_state(self) -> S:
        """Read the current state tree."""
        return self._state

    @contextmanager
    def _dispatching(self) -> Iterator[None]:
        self._is_dispatching = True
        try:
            yield
        finally:
            self._is_dispatching = False

    def dispatch(self, action: Action) -> Action:
        """Apply action to the state, then notify every subscribed listener.

        Returns the action unchanged so middleware can forward it.
        """
        if not is_plain_object(action):
            raise InvalidAction(
                "Actions must be plain dicts. Use custom middleware for async actions."
            )

        if action.get("type") is None:
            raise InvalidAction(
                'Actions may not have an undefined "type" key. Have you misspelled a constant?'
            )

        if self._is_dispatching:
            raise ReentrantDispatch("Reducers may not dispatch actions.")

        with self._dispatching():
            next_state = self._reducer(self._state, action)
        self._state = next_state

        for listener in self._listeners.snapshot():
            listener()

        return action

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register a change listener. Returns a function that removes it.

        Listeners added or removed during a notification pass only take
        effect from the next dispatch on.
        """
        if not callable(listener):
            raise InvalidListener("Expected listener to be a function.")

        self._listeners.add(listener)
        subscribed = True

        def _unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            self._listeners.remove(listener)

        return _unsubscribe

    def replace_reducer(self, next_reducer: Reducer) -> None:
        """Swap the reducer (hot reload, code splitting) and re-run INIT.

        Subscriptions and store identity are kept.
        """
        if not callable(next_reducer):
            raise InvalidReducer("Expected the next_reducer to be a function.")

        self._reducer = next_reducer
        self.dispatch({"type": ActionTypes.INIT})

    def observable(self) -> StoreObservable:
        """Minimal observable view of the state, for reactive libraries."""
        return StoreObservable(self)

    __observable__ = observable

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state!r}, listeners={len(self._listeners)})"


def create_store(
    reducer: Reducer,
    preloaded_state: Any = None,
    enhancer: Enhancer | None = None,
) -> StoreLike:
    """Create a Store, optionally wrapped by an enhancer.

    create_store(reducer, enhancer) is accepted as a shorthand when there is
    no preloaded state.

    Usage:
        def counter(state, action):
            if state is None:
                state = 0
            if action["type"] == "INC":
                return state + 1
            return state

        store = create_store(counter)
        store.dispatch({"type": "INC"})
        store.get_state()  # 1
    """
    if callable(preloaded_state) and enhancer is None:
        enhancer = preloaded_state
        preloaded_state = None

    if enhancer is not None:
        if not callable(enhancer):
            raise InvalidEnhancer("Expected the enhancer to be a function.")
        return enhancer(create_store)(reducer, preloaded_state)

    return Store(reducer, preloaded_state)
