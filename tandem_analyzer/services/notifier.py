from __future__ import annotations

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeNotifier:
    """
    Minimal observer support for the stores.

    `revision` increases on every change so a rendering layer can tell
    whether it is looking at stale state without holding a listener.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self.revision = 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        self.revision += 1
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                # A broken renderer must not undo a committed state change
                logger.exception("Store listener failed")
