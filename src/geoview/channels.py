"""Ingestion channels — the three ways a document reaches the session.

    FilePickerChannel   a file chosen in a picker dialog
    DropChannel         files dropped on the window (plus the drop indicator)
    ManualChannel       the editor pane's text, on explicit confirmation

Each channel only gets raw text into ``ViewerSession.ingest``; what happens
after decoding is the session's business. File reads are the only
suspension points. Reads are never cancelled: overlapping reads apply in
completion order, each as one atomic step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from loguru import logger

from geoview.errors import ReadFailure
from geoview.events import DROP_INDICATOR
from geoview.files import IncomingFile, is_accepted
from geoview.indicator import DropIndicator
from geoview.result import IngestionResult

if TYPE_CHECKING:
    from geoview.session import ViewerSession


class _FileChannel:
    """Shared gating and read procedure for file-based channels."""

    name = "file"

    def __init__(self, session: ViewerSession) -> None:
        self._session = session

    def accepts(self, file: IncomingFile) -> bool:
        return is_accepted(file.content_type, self._session.accepted_content_types)

    async def _read_and_ingest(self, file: IncomingFile) -> IngestionResult | None:
        if not self.accepts(file):
            # Unsupported types are a silent no-op: nothing is read
            logger.debug(
                f"Ignoring {file.filename!r} via {self.name}: "
                f"content type {file.content_type!r} not accepted"
            )
            return None

        try:
            raw = await file.read()
        except OSError as e:
            return self._session.reject(
                ReadFailure(f"Could not read {file.filename}: {e}"), channel=self.name
            )
        logger.debug(f"Read {len(raw)} bytes from {file.filename!r} via {self.name}")
        return self._session.ingest(raw, channel=self.name)


class FilePickerChannel(_FileChannel):
    """A single file selected in a picker dialog."""

    name = "file_picker"

    async def file_selected(self, file: IncomingFile) -> IngestionResult | None:
        """Ingest the selected file.

        Returns:
            The ingestion result, or None when the file type is not accepted.
        """
        return await self._read_and_ingest(file)


class DropChannel(_FileChannel):
    """Files dropped onto the window, with the drop-target indicator."""

    name = "drop"

    def __init__(self, session: ViewerSession) -> None:
        super().__init__(session)
        self.indicator = DropIndicator(on_change=self._indicator_changed)

    def drag_event(self, event: str) -> bool:
        """Feed a drag gesture event to the indicator; returns visibility."""
        return self.indicator.handle(event)

    async def files_dropped(self, files: Sequence[IncomingFile]) -> IngestionResult | None:
        """Ingest the first dropped file; any others are ignored."""
        self.indicator.handle("drop")
        if not files:
            return None
        if len(files) > 1:
            logger.debug(f"{len(files)} files dropped, using {files[0].filename!r}")
        return await self._read_and_ingest(files[0])

    def _indicator_changed(self, visible: bool) -> None:
        self._session.bus.publish(DROP_INDICATOR, {"visible": visible})


class ManualChannel:
    """Submission of the editor pane's current text."""

    name = "manual"

    def __init__(self, session: ViewerSession) -> None:
        self._session = session

    def submit(self) -> IngestionResult:
        # Read at confirmation time, not a cached copy
        text = self._session.editor.current_text()
        return self._session.ingest(text, channel=self.name)
