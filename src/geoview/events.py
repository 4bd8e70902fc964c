"""Session event fan-out.

The session announces ingestion outcomes and drop-indicator transitions
here; UI adapters (the viewer websocket) register listeners to forward them
to the page. Listeners run synchronously on the publishing thread and must
not block.
"""

from __future__ import annotations

import threading
from typing import Callable

from loguru import logger

INGEST_OK = "ingest_ok"
INGEST_FAILED = "ingest_failed"
DROP_INDICATOR = "drop_indicator"

Listener = Callable[[dict], None]


class EventBus:
    """Delivers ``{"type": ..., "data": ...}`` messages to every listener."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``. Returns a function that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event_type: str, data: dict | None = None) -> None:
        msg = {"type": event_type}
        if data is not None:
            msg["data"] = data
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(msg)
            except Exception:
                # One broken listener must not keep the event from the others
                logger.opt(exception=True).warning(f"Event listener failed on {event_type}")
