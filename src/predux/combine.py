"""combine_reducers() — one reducer built from a mapping of named reducers.

Each member reducer owns the slice of the state dict under its key. Members
are validated once, at composition time: they must return a non-None state
for INIT and for a random private action type. A failed validation poisons
the combined reducer, which then raises the same error on every call.

The combined reducer returns the previous state object unchanged when no
slice changed (identity comparison), so callers can detect changes cheaply.
"""

from __future__ import annotations

import random
import string
from typing import Any, Mapping

from predux._warning import diagnostics_enabled, warning
from predux.action import Action, ActionTypes, is_plain_object
from predux.errors import ReducerShapeViolation, UndefinedReducerResult
from predux.store import Reducer

_BASE36 = string.digits + string.ascii_lowercase


def _probe_action_type() -> str:
    suffix = "".join(random.choice(_BASE36) for _ in range(6))
    return ActionTypes.PROBE_UNKNOWN_ACTION + ".".join(suffix)


def _undefined_state_message(key: str, action: Action | None) -> str:
    action_type = action.get("type") if isinstance(action, dict) else None
    action_name = f'"{action_type}"' if action_type is not None else "an action"
    return (
        f'Given action {action_name}, reducer "{key}" returned None. '
        "To ignore an action, you must explicitly return the previous state."
    )


def _unexpected_state_shape_message(
    state: Any,
    reducers: Mapping[str, Reducer],
    action: Action | None,
    unexpected_key_cache: set,
) -> str | None:
    if isinstance(action, dict) and action.get("type") == ActionTypes.INIT:
        argument_name = "preloaded_state argument passed to create_store"
    else:
        argument_name = "previous state received by the reducer"

    if not reducers:
        return (
            "Store does not have a valid reducer. Make sure the argument passed "
            "to combine_reducers is a mapping whose values are reducers."
        )

    expected = '", "'.join(str(k) for k in reducers)
    if not is_plain_object(state):
        return (
            f'The {argument_name} has unexpected type of "{type(state).__name__}". '
            f'Expected argument to be a dict with the following keys: "{expected}"'
        )

    unexpected_keys = [k for k in state if k not in reducers and k not in unexpected_key_cache]
    unexpected_key_cache.update(unexpected_keys)

    if unexpected_keys:
        noun = "keys" if len(unexpected_keys) > 1 else "key"
        found = '", "'.join(str(k) for k in unexpected_keys)
        return (
            f'Unexpected {noun} "{found}" found in {argument_name}. '
            f'Expected to find one of the known reducer keys instead: "{expected}". '
            "Unexpected keys will be ignored."
        )
    return None


def _assert_reducer_shape(reducers: Mapping[str, Reducer]) -> None:
    for key, reducer in reducers.items():
        if reducer(None, {"type": ActionTypes.INIT}) is None:
            raise ReducerShapeViolation(
                f'Reducer "{key}" returned None during initialization. '
                "If the state passed to the reducer is None, you must explicitly "
                "return the initial state. The initial state may not be None."
            )

        if reducer(None, {"type": _probe_action_type()}) is None:
            raise ReducerShapeViolation(
                f'Reducer "{key}" returned None when probed with a random type. '
                f'Don\'t try to handle {ActionTypes.INIT} or other actions in the "@@redux/*" '
                "namespace. They are considered private. Instead, you must return the "
                "current state for any unknown actions, unless it is None, in which case "
                "you must return the initial state, regardless of the action type."
            )


def combine_reducers(reducers: Mapping[str, Reducer]) -> Reducer:
    """Build one reducer whose state is a dict keyed like `reducers`.

    Usage:
        def count(state, action):
            if state is None:
                state = 0
            return state + 1 if action["type"] == "INC" else state

        root = combine_reducers({"count": count})
        store = create_store(root)
        store.dispatch({"type": "INC"})
        store.get_state()  # {"count": 1}
    """
    check = diagnostics_enabled()
    final_reducers: dict[str, Reducer] = {}
    for key, reducer in reducers.items():
        if callable(reducer):
            final_reducers[key] = reducer
        elif check:
            warning(f'No reducer provided for key "{key}"')

    unexpected_key_cache: set = set()

    shape_error: ReducerShapeViolation | None = None
    try:
        _assert_reducer_shape(final_reducers)
    except ReducerShapeViolation as e:
        shape_error = e

    def combination(state: dict | None = None, action: Action | None = None) -> dict:
        if shape_error is not None:
            raise shape_error

        if state is None:
            state = {}

        if check:
            message = _unexpected_state_shape_message(state, final_reducers, action, unexpected_key_cache)
            if message:
                warning(message)

        has_changed = False
        next_state: dict = {}
        for key, reducer in final_reducers.items():
            previous_state_for_key = state.get(key) if is_plain_object(state) else None
            next_state_for_key = reducer(previous_state_for_key, action)
            if next_state_for_key is None:
                raise UndefinedReducerResult(_undefined_state_message(key, action))
            next_state[key] = next_state_for_key
            has_changed = has_changed or next_state_for_key is not previous_state_for_key

        return next_state if has_changed else state

    return combination
