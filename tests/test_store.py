"""Tests for Store and create_store."""

import pytest

from predux import (
    ActionTypes,
    InvalidAction,
    InvalidEnhancer,
    InvalidListener,
    InvalidReducer,
    ReentrantDispatch,
    Store,
    StoreLike,
    apply_middleware,
    create_store,
)


def counter(state, action):
    if state is None:
        state = 0
    if action["type"] == "INC":
        return state + 1
    return state


def todos(state, action):
    if state is None:
        state = []
    if action["type"] == "ADD_TODO":
        return state + [action["text"]]
    return state


class TestCreation:
    def test_init_populates_state(self):
        store = create_store(counter)
        assert store.get_state() == 0

    def test_preloaded_state(self):
        store = create_store(counter, 41)
        assert store.get_state() == 41
        store.dispatch({"type": "INC"})
        assert store.get_state() == 42

    def test_reducer_sees_init(self):
        seen = []

        def reducer(state, action):
            seen.append(action["type"])
            return state or {}

        create_store(reducer)
        assert seen == [ActionTypes.INIT]

    def test_rejects_non_callable_reducer(self):
        with pytest.raises(InvalidReducer):
            create_store({"not": "a function"})

    def test_rejects_non_callable_enhancer(self):
        with pytest.raises(InvalidEnhancer):
            create_store(counter, 0, "enhancer")

    def test_enhancer_receives_unenhanced_creator(self):
        calls = []

        def enhancer(create):
            def wrapped(reducer, preloaded_state):
                calls.append(create)
                return create(reducer, preloaded_state)
            return wrapped

        store = create_store(counter, 5, enhancer)
        assert calls == [create_store]
        assert store.get_state() == 5

    def test_enhancer_as_second_argument(self):
        calls = []

        def enhancer(create):
            def wrapped(reducer, preloaded_state):
                calls.append(preloaded_state)
                return create(reducer, preloaded_state)
            return wrapped

        store = create_store(counter, enhancer)
        assert calls == [None]
        assert store.get_state() == 0

    def test_returns_store_surface_with_or_without_enhancer(self):
        plain = create_store(counter)
        enhanced = create_store(counter, apply_middleware())
        assert isinstance(plain, Store)
        assert not isinstance(enhanced, Store)
        assert isinstance(plain, StoreLike)
        assert isinstance(enhanced, StoreLike)

    def test_store_class_directly(self):
        s = Store(counter)
        assert s.get_state() == 0
        assert "Store(state=0" in repr(s)


class TestDispatch:
    def test_scenario_increment(self):
        store = create_store(counter)
        store.dispatch({"type": "INC"})
        assert store.get_state() == 1

    def test_returns_action(self):
        store = create_store(counter)
        action = {"type": "INC"}
        assert store.dispatch(action) is action

    def test_unknown_action_keeps_reference(self):
        state = {"a": 1}
        store = create_store(lambda s, a: s, state)
        store.dispatch({"type": "UNKNOWN"})
        assert store.get_state() is state

    def test_preserves_state_identity_through_reducer(self):
        store = create_store(todos)
        store.dispatch({"type": "ADD_TODO", "text": "one"})
        before = store.get_state()
        store.dispatch({"type": "NOOP"})
        assert store.get_state() is before

    def test_rejects_non_dict(self):
        store = create_store(counter)
        with pytest.raises(InvalidAction):
            store.dispatch(lambda: None)
        with pytest.raises(InvalidAction):
            store.dispatch("INC")

    def test_rejects_missing_type(self):
        store = create_store(counter)
        with pytest.raises(InvalidAction, match="type"):
            store.dispatch({})
        with pytest.raises(InvalidAction):
            store.dispatch({"type": None})

    def test_falsy_type_is_allowed(self):
        store = create_store(counter)
        store.dispatch({"type": 0})
        store.dispatch({"type": ""})
        assert store.get_state() == 0

    def test_reentrant_dispatch_rejected(self):
        holder = {}

        def reducer(state, action):
            if state is None:
                state = 0
            if action["type"] == "NESTED":
                holder["store"].dispatch({"type": "INC"})
            return state + 1 if action["type"] == "INC" else state

        store = create_store(reducer)
        holder["store"] = store
        with pytest.raises(ReentrantDispatch):
            store.dispatch({"type": "NESTED"})
        assert store.get_state() == 0

    def test_guard_released_after_reducer_error(self):
        def reducer(state, action):
            if action["type"] == "BOOM":
                raise RuntimeError("boom")
            return counter(state, action)

        store = create_store(reducer)
        with pytest.raises(RuntimeError):
            store.dispatch({"type": "BOOM"})
        assert store.get_state() == 0
        store.dispatch({"type": "INC"})
        assert store.get_state() == 1

    def test_listener_error_propagates(self):
        store = create_store(counter)

        def bad():
            raise ValueError("listener")

        store.subscribe(bad)
        with pytest.raises(ValueError):
            store.dispatch({"type": "INC"})
        assert store.get_state() == 1

    def test_get_state_inside_reducer(self):
        holder = {}
        seen = []

        def reducer(state, action):
            if "store" in holder:
                seen.append(holder["store"].get_state())
            return counter(state, action)

        store = create_store(reducer)
        holder["store"] = store
        store.dispatch({"type": "INC"})
        assert seen == [0]


class TestSubscribe:
    def test_listeners_called_in_order(self):
        store = create_store(counter)
        log = []
        store.subscribe(lambda: log.append("a"))
        store.subscribe(lambda: log.append("b"))
        store.dispatch({"type": "INC"})
        assert log == ["a", "b"]

    def test_listener_sees_new_state(self):
        store = create_store(counter)
        seen = []
        store.subscribe(lambda: seen.append(store.get_state()))
        store.dispatch({"type": "INC"})
        store.dispatch({"type": "INC"})
        assert seen == [1, 2]

    def test_unsubscribe(self):
        store = create_store(counter)
        log = []
        unsub = store.subscribe(lambda: log.append(1))
        store.dispatch({"type": "INC"})
        unsub()
        store.dispatch({"type": "INC"})
        assert log == [1]

    def test_unsubscribe_idempotent(self):
        store = create_store(counter)
        log = []
        listener = lambda: log.append(1)  # noqa: E731
        unsub_a = store.subscribe(listener)
        store.subscribe(listener)
        unsub_a()
        unsub_a()  # must not remove the second registration
        store.dispatch({"type": "INC"})
        assert log == [1]

    def test_rejects_non_callable(self):
        store = create_store(counter)
        with pytest.raises(InvalidListener):
            store.subscribe("nope")

    def test_subscribe_during_dispatch_waits_for_next(self):
        store = create_store(counter)
        log = []

        def late():
            log.append("late")

        def first():
            log.append("first")
            if len(log) == 1:
                store.subscribe(late)

        store.subscribe(first)
        store.dispatch({"type": "INC"})
        assert log == ["first"]
        store.dispatch({"type": "INC"})
        assert log == ["first", "first", "late"]

    def test_self_unsubscribe_still_called_once(self):
        store = create_store(counter)
        log = []
        unsubs = {}

        def a():
            log.append("a")
            unsubs["a"]()

        unsubs["a"] = store.subscribe(a)
        store.subscribe(lambda: log.append("b"))
        store.dispatch({"type": "INC"})
        store.dispatch({"type": "INC"})
        assert log == ["a", "b", "b"]

    def test_unsubscribe_other_during_dispatch_delivers_current_pass(self):
        store = create_store(counter)
        log = []
        unsubs = {}

        def a():
            log.append("a")
            unsubs["b"]()

        store.subscribe(a)
        unsubs["b"] = store.subscribe(lambda: log.append("b"))
        store.dispatch({"type": "INC"})
        assert log == ["a", "b"]
        store.dispatch({"type": "INC"})
        assert log == ["a", "b", "a"]

    def test_nested_dispatch_from_listener(self):
        store = create_store(counter)
        seen_a, seen_b = [], []

        def a():
            seen_a.append(store.get_state())
            if store.get_state() == 1:
                store.dispatch({"type": "INC"})

        def b():
            seen_b.append(store.get_state())

        store.subscribe(a)
        store.subscribe(b)
        store.dispatch({"type": "INC"})
        # Each listener runs once per dispatch; the nested pass runs first for b.
        assert seen_a == [1, 2]
        assert seen_b == [2, 2]
        assert store.get_state() == 2


class TestReplaceReducer:
    def test_reshapes_state(self):
        store = create_store(counter)
        store.dispatch({"type": "INC"})

        def doubled(state, action):
            return (state or 0) * 2 if action["type"] == ActionTypes.INIT else state

        store.replace_reducer(doubled)
        assert store.get_state() == 2

    def test_keeps_subscriptions(self):
        store = create_store(counter)
        log = []
        store.subscribe(lambda: log.append(store.get_state()))

        def by_ten(state, action):
            if state is None:
                state = 0
            return state + 10 if action["type"] == "INC" else state

        store.replace_reducer(by_ten)
        store.dispatch({"type": "INC"})
        assert log == [0, 10]

    def test_rejects_non_callable(self):
        store = create_store(counter)
        with pytest.raises(InvalidReducer):
            store.replace_reducer(None)
