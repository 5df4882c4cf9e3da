"""apply_middleware() — a store enhancer that wraps dispatch in interceptors.

A middleware has the shape api -> next_dispatch -> action -> result. The
chain is built in two phases: every middleware is first constructed against
a placeholder dispatch that refuses to run, then the composed dispatch is
sealed into that placeholder. A middleware that dispatches during its own
construction fails loudly instead of bypassing the rest of the chain.
"""

from __future__ import annotations

from typing import Any, Callable

from predux.action import Action, Dispatch
from predux.compose import compose
from predux.errors import EarlyDispatchError
from predux.observable import StoreObservable
from predux.store import Enhancer, Listener, Reducer, StoreCreator, StoreLike, Unsubscribe

Middleware = Callable[["MiddlewareAPI"], Callable[[Dispatch], Dispatch]]


class _DeferredDispatch:
    """Dispatch capability that is usable only after seal()."""

    __slots__ = ("_target",)

    def __init__(self) -> None:
        self._target: Dispatch | None = None

    def seal(self, dispatch: Dispatch) -> None:
        self._target = dispatch

    def __call__(self, action: Action) -> Any:
        if self._target is None:
            raise EarlyDispatchError(
                "Dispatching while constructing your middleware is not allowed. "
                "Other middleware would not be applied to this dispatch."
            )
        return self._target(action)


class MiddlewareAPI:
    """What each middleware sees: get_state and the fully wrapped dispatch."""

    __slots__ = ("get_state", "dispatch")

    def __init__(self, get_state: Callable[[], Any], dispatch: Dispatch) -> None:
        self.get_state = get_state
        self.dispatch = dispatch


class MiddlewareStore:
    """A store whose dispatch runs through the middleware chain.

    Every other operation goes straight to the wrapped store.
    """

    def __init__(self, store: StoreLike, dispatch: Dispatch) -> None:
        self._store = store
        self.dispatch = dispatch

    def get_state(self) -> Any:
        return self._store.get_state()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        return self._store.subscribe(listener)

    def replace_reducer(self, next_reducer: Reducer) -> Any:
        return self._store.replace_reducer(next_reducer)

    def observable(self) -> StoreObservable:
        return self._store.observable()

    __observable__ = observable

    def __repr__(self) -> str:
        return f"MiddlewareStore({self._store!r})"


def apply_middleware(*middlewares: Middleware) -> Enhancer:
    """Create an enhancer that runs every dispatch through `middlewares`.

    The leftmost middleware sees the action first.

    Usage:
        def logger(api):
            def wrap(next_dispatch):
                def dispatch(action):
                    print("dispatching", action)
                    result = next_dispatch(action)
                    print("next state", api.get_state())
                    return result
                return dispatch
            return wrap

        store = create_store(reducer, apply_middleware(logger))
    """

    def enhancer(create: StoreCreator) -> StoreCreator:
        def create_with_middleware(reducer: Reducer, preloaded_state: Any = None, enhancer: Enhancer | None = None):
            store = create(reducer, preloaded_state, enhancer)

            deferred = _DeferredDispatch()
            api = MiddlewareAPI(store.get_state, deferred)
            chain = [middleware(api) for middleware in middlewares]
            dispatch = compose(*chain)(store.dispatch)
            deferred.seal(dispatch)

            return MiddlewareStore(store, dispatch)

        return create_with_middleware

    return enhancer
