"""Hot-reload-aware store. Opt-in — import only if you need hot-reload support."""

import logging

from predux.errors import InvalidReducer
from predux.store import Store

logger = logging.getLogger("predux.hot_reload")


class HotReloadStore(Store):
    """Store whose reducer can be swapped on module reload without crashing.

    Same API as Store. Adds:
    - Exception safety: a reducer that fails its INIT pass is rolled back
    - Logging: swaps and rollbacks are clearly logged
    - Degraded operation: on failure the previous reducer, state and
      subscriptions stay in place
    """

    def replace_reducer(self, next_reducer) -> bool:
        """Safe reducer swap — catches INIT failures, logs, never crashes.

        Returns True if the new reducer is installed, False if it was rolled back.
        """
        previous = self._reducer
        previous_state = self._state
        try:
            super().replace_reducer(next_reducer)
        except InvalidReducer:
            raise
        except Exception:
            logger.exception("Failed to replace reducer, keeping %r", previous)
            self._reducer = previous
            self._state = previous_state
            return False

        logger.info(
            "Replaced reducer %s -> %s",
            getattr(previous, "__name__", repr(previous)),
            getattr(next_reducer, "__name__", repr(next_reducer)),
        )
        return True
