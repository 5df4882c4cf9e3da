"""Actions — plain dicts with a "type" key, plus the creator binder.

An action creator is any function returning an action. bind_action_creators()
wraps creators so that calling them dispatches the result directly.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Mapping

from predux._warning import warning
from predux.errors import InvalidActionCreators

Action = dict[str, Any]
Dispatch = Callable[[Action], Any]


class ActionTypes:
    """Private action types reserved by predux.

    Reducers must treat these as unknown: return the current state, or the
    initial state when the current state is None.
    """

    INIT = "@@redux/INIT"
    PROBE_UNKNOWN_ACTION = "@@redux/PROBE_UNKNOWN_ACTION_"


def is_plain_object(value: object) -> bool:
    """True for plain data records (dicts). Callables and class instances are not."""
    return isinstance(value, dict)


def _bind(action_creator: Callable[..., Action], dispatch: Dispatch) -> Callable[..., Any]:
    @functools.wraps(action_creator)
    def bound(*args, **kwargs):
        return dispatch(action_creator(*args, **kwargs))

    return bound


def bind_action_creators(action_creators, dispatch: Dispatch):
    """Wrap a creator, or a mapping of creators, so each call dispatches its action.

    Usage:
        def add_todo(text):
            return {"type": "ADD_TODO", "text": text}

        add = bind_action_creators(add_todo, store.dispatch)
        add("write tests")  # dispatched

        actions = bind_action_creators({"add": add_todo}, store.dispatch)
        actions["add"]("ship it")
    """
    if callable(action_creators):
        return _bind(action_creators, dispatch)

    if not isinstance(action_creators, Mapping):
        received = "None" if action_creators is None else type(action_creators).__name__
        raise InvalidActionCreators(
            f"bind_action_creators expected a mapping or a function, instead received {received}. "
            f'Did you write "from actions import add_todo" instead of "import actions"?'
        )

    bound: dict[Any, Callable[..., Any]] = {}
    for key, action_creator in action_creators.items():
        if callable(action_creator):
            bound[key] = _bind(action_creator, dispatch)
        else:
            warning(
                f"bind_action_creators expected a function action creator for key {key!r}, "
                f"instead received type {type(action_creator).__name__!r}."
            )
    return bound
