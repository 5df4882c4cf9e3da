"""Developer diagnostics — non-fatal messages routed through logging.

Nothing in the core depends on these side effects. Diagnostics are on unless
PREDUX_ENV=production; set_diagnostics() overrides that at runtime.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger("predux")

_enabled: bool = os.environ.get("PREDUX_ENV") != "production"


def set_diagnostics(enabled: bool) -> None:
    """Turn development-only checks on or off.

    Call once at startup, before building reducers:
        predux.set_diagnostics(False)
    """
    global _enabled
    _enabled = enabled


def diagnostics_enabled() -> bool:
    return _enabled


def warning(message: str) -> None:
    """Report a non-fatal problem. Fire-and-forget, never raises."""
    logger.warning(message)
