"""EditorSurface — the text pane next to the map.

It shows the last ingested document for inspection and doubles as the
source for manual submissions. Reflecting text into it never triggers an
ingestion; only an explicit submit does.
"""

from __future__ import annotations

import threading
from typing import Protocol

PLACEHOLDER = """{
    type: "FeatureCollection",
    features:[

    ]
}"""


class TextEditor(Protocol):
    """Text widget collaborator."""

    def get_value(self) -> str: ...

    def set_value(self, text: str) -> None: ...


class InMemoryTextEditor:
    """Headless text widget."""

    def __init__(self, value: str = "", placeholder: str = PLACEHOLDER) -> None:
        self._value = value
        self.placeholder = placeholder

    def get_value(self) -> str:
        return self._value

    def set_value(self, text: str) -> None:
        self._value = text


class EditorSurface:
    """Tracks what the user sees and what was last applied to the map."""

    def __init__(self, widget: TextEditor | None = None) -> None:
        self._widget = widget if widget is not None else InMemoryTextEditor()
        self._lock = threading.Lock()
        self._applied_text = self._widget.get_value()

    @property
    def widget(self) -> TextEditor:
        return self._widget

    @property
    def applied_text(self) -> str:
        """Text of the last successfully ingested document."""
        return self._applied_text

    @property
    def is_dirty(self) -> bool:
        """True when the user has typed something not yet submitted."""
        return self.current_text() != self._applied_text

    def reflect(self, text: str) -> None:
        """Show an ingested document. Does not re-ingest."""
        with self._lock:
            self._widget.set_value(text)
            self._applied_text = text

    def edit(self, text: str) -> None:
        """User typing: changes what is displayed, nothing else."""
        with self._lock:
            self._widget.set_value(text)

    def current_text(self) -> str:
        # Always read from the widget; the user may have typed since the last reflect
        return self._widget.get_value()
