"""Textual integration for predux. Opt-in — requires textual.

Guard, NoMatches handling and thread marshaling are enforced here, so widget
code subscribed to a store never has to repeat them. _paused_apps is owned by
this module: an app id is present exactly while inside its pause() context.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches
from predux import autorun as _autorun, reaction as _reaction

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded callbacks during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, fn):
    _main = threading.get_ident()

    def _safe(*args):
        try:
            fn(*args)
        except NoMatches:
            pass

    def _guarded(*args):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, *args)
        else:
            _safe(*args)

    return _guarded


def subscribe(app, store, listener):
    """store.subscribe() that safely bridges to Textual widgets.

    Returns the store's unsubscribe function.
    """
    return store.subscribe(_guard(app, listener))


def reaction(app, store, select, effect, *, fire_immediately=False):
    """reaction() that safely bridges to Textual widgets.

    Guards against firing during pause/not-running, catches NoMatches
    from widget queries, and marshals cross-thread calls via call_from_thread.
    """
    return _reaction(store, select, _guard(app, effect), fire_immediately=fire_immediately)


def autorun(app, store, fn):
    """autorun() that safely bridges to Textual widgets.

    The initial run happens immediately, under the same guard.
    """
    return _autorun(store, _guard(app, fn))
