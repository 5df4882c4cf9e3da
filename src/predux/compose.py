"""Right-to-left function composition.

compose(f, g, h)(*args) == f(g(h(*args))). The rightmost function gets the
original arguments; every other function gets the single return value of the
function to its right.
"""

from __future__ import annotations

import functools
from typing import Any, Callable


def _identity(arg: Any) -> Any:
    return arg


def compose(*funcs: Callable) -> Callable:
    """Compose single-argument functions from right to left.

    Usage:
        inc = lambda x: x + 1
        double = lambda x: x * 2

        compose(inc, double)(5)  # 11
        compose()(5)             # 5
    """
    if not funcs:
        return _identity

    if len(funcs) == 1:
        return funcs[0]

    return functools.reduce(lambda a, b: lambda *args, **kwargs: a(b(*args, **kwargs)), funcs)
