"""Drop-target indicator state machine.

    hidden --(dragenter | dragover)--> visible
    visible --(dragleave | dragexit | dragend | drop)--> hidden

Repeated events are idempotent. The indicator is presentational only and
has no bearing on whether a drop decodes.
"""

from __future__ import annotations

import threading
from typing import Callable

from loguru import logger

HIDDEN = "hidden"
VISIBLE = "visible"

SHOW_EVENTS = frozenset({"dragenter", "dragover"})
HIDE_EVENTS = frozenset({"dragleave", "dragexit", "dragend", "drop"})
DRAG_EVENTS = SHOW_EVENTS | HIDE_EVENTS


class DropIndicator:
    """Two-state overlay shown while files are dragged over the window."""

    def __init__(self, on_change: Callable[[bool], None] | None = None) -> None:
        self._lock = threading.Lock()
        self._state = HIDDEN
        self._on_change = on_change

    @property
    def state(self) -> str:
        return self._state

    @property
    def visible(self) -> bool:
        return self._state == VISIBLE

    def handle(self, event: str) -> bool:
        """Apply a drag event.

        Args:
            event: One of dragenter, dragover, dragleave, dragexit, dragend, drop.

        Returns:
            Whether the indicator is visible after the event.

        Raises:
            ValueError: If the event name is not a drag event.
        """
        if event in SHOW_EVENTS:
            target = VISIBLE
        elif event in HIDE_EVENTS:
            target = HIDDEN
        else:
            raise ValueError(f"Unknown drag event: {event}")

        with self._lock:
            changed = target != self._state
            self._state = target

        if changed:
            logger.debug(f"Drop indicator {target} on {event}")
            if self._on_change is not None:
                self._on_change(target == VISIBLE)
        return target == VISIBLE
