"""Exception hierarchy.

Every error is raised synchronously to the caller that triggered it.
Argument-type failures are also TypeErrors so generic handlers still work.
"""

from __future__ import annotations


class PreduxError(Exception):
    """Base class for every error raised by predux."""


class InvalidEnhancer(PreduxError, TypeError):
    pass


class InvalidReducer(PreduxError, TypeError):
    pass


class InvalidAction(PreduxError, TypeError):
    pass


class InvalidListener(PreduxError, TypeError):
    pass


class InvalidActionCreators(PreduxError, TypeError):
    pass


class InvalidObserver(PreduxError, TypeError):
    pass


class ReentrantDispatch(PreduxError, RuntimeError):
    """dispatch() was called while a reducer was running."""


class EarlyDispatchError(PreduxError, RuntimeError):
    """A middleware dispatched before the middleware chain was sealed."""


class UndefinedReducerResult(PreduxError, ValueError):
    """A member reducer returned None for a concrete action."""


class ReducerShapeViolation(PreduxError, ValueError):
    """A member reducer failed INIT or probe validation in combine_reducers()."""
