"""predux: a minimal, predictable state container for Python."""

from importlib.metadata import version as _version

__version__ = _version("predux")

from predux._warning import set_diagnostics, diagnostics_enabled
from predux.errors import (
    PreduxError,
    InvalidEnhancer,
    InvalidReducer,
    InvalidAction,
    InvalidListener,
    InvalidActionCreators,
    InvalidObserver,
    ReentrantDispatch,
    EarlyDispatchError,
    UndefinedReducerResult,
    ReducerShapeViolation,
)
from predux.action import ActionTypes, bind_action_creators
from predux.compose import compose
from predux.observable import OBSERVABLE, StoreObservable, Subscription
from predux.store import Store, StoreLike, create_store
from predux.combine import combine_reducers
from predux.middleware import MiddlewareAPI, MiddlewareStore, apply_middleware
from predux.reaction import Reaction, autorun, reaction
# hot_reload and textual NOT auto-imported — opt-in only

__all__ = [
    "create_store",
    "Store",
    "StoreLike",
    "combine_reducers",
    "compose",
    "apply_middleware",
    "MiddlewareAPI",
    "MiddlewareStore",
    "bind_action_creators",
    "ActionTypes",
    "OBSERVABLE",
    "StoreObservable",
    "Subscription",
    "Reaction",
    "autorun",
    "reaction",
    "set_diagnostics",
    "diagnostics_enabled",
    "PreduxError",
    "InvalidEnhancer",
    "InvalidReducer",
    "InvalidAction",
    "InvalidListener",
    "InvalidActionCreators",
    "InvalidObserver",
    "ReentrantDispatch",
    "EarlyDispatchError",
    "UndefinedReducerResult",
    "ReducerShapeViolation",
]
