"""ViewerSession — owns everything one map/editor pair needs.

A session is built explicitly and handed to its channels, so any number of
independent sessions can run side by side (one per app, one per test).

Successful ingestion applies three steps together or not at all:

    1. GeometrySource.replace(collection)
    2. EditorSurface.reflect(text)
    3. RenderSync.trigger()

A failed ingestion touches none of them.
"""

from __future__ import annotations

import threading

from loguru import logger

from geoview.channels import DropChannel, FilePickerChannel, ManualChannel
from geoview.config import Settings
from geoview.decode import decode_geojson
from geoview.editor import EditorSurface
from geoview.errors import IngestionError
from geoview.events import INGEST_FAILED, INGEST_OK, EventBus
from geoview.render import (
    FeaturesDataSource,
    HeadlessFeaturesDataSource,
    HeadlessMapView,
    MapView,
    RenderSync,
)
from geoview.result import IngestionResult
from geoview.source import GeometrySource
from geoview.styles import RenderInstruction, StyleCatalog, default_catalog


class ViewerSession:
    """One interactive map session: styling, geometry, editor, redraws."""

    def __init__(
        self,
        catalog: StyleCatalog | None = None,
        map_view: MapView | None = None,
        display: FeaturesDataSource | None = None,
        editor: EditorSurface | None = None,
        settings: Settings | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.catalog = catalog if catalog is not None else default_catalog()
        self.map_view = map_view if map_view is not None else HeadlessMapView(
            self.settings.window_width - self.settings.editor_width,
            self.settings.window_height,
        )
        self.display = display if display is not None else HeadlessFeaturesDataSource()
        self.editor = editor if editor is not None else EditorSurface()
        self.bus = bus if bus is not None else EventBus()

        self.source = GeometrySource(self.display)
        self.render = RenderSync(self.map_view, self.settings.editor_width)

        self.file_picker = FilePickerChannel(self)
        self.drop = DropChannel(self)
        self.manual = ManualChannel(self)

        self._apply_lock = threading.Lock()
        self._started = False
        self._last_error: IngestionError | None = None

    @property
    def accepted_content_types(self) -> list[str]:
        return self.settings.accepted_content_types

    @property
    def started(self) -> bool:
        return self._started

    @property
    def last_error(self) -> IngestionError | None:
        """Most recent failure, cleared by the next success."""
        return self._last_error

    async def start(self) -> None:
        """Attach the display to the map, then install the style set once."""
        if self._started:
            return
        await self.map_view.add_data_source(self.display)
        self.display.set_style_set(self.catalog.style_set())
        self._started = True
        logger.info(f"Viewer session started with {len(self.catalog)} style rules")

    def ingest(self, raw: str | bytes, channel: str = "api") -> IngestionResult:
        """Decode ``raw`` and, if it is a GeoJSON document, apply it.

        Args:
            raw: Document text or file bytes.
            channel: Name of the channel the input arrived on, for logs/events.

        Returns:
            The decode result. On failure nothing in the session changed.
        """
        result = decode_geojson(raw)
        if not result.ok:
            return self.reject(result.error, channel=channel)

        with self._apply_lock:
            self.source.replace(result.collection)
            self.editor.reflect(result.text)
            self.render.trigger()
            self._last_error = None

        counts = result.collection.count_by_kind()
        logger.info(
            f"Applied {len(result.collection)} features via {channel} "
            f"(points={counts['point']}, lines={counts['line']}, polygons={counts['polygon']})"
        )
        self.bus.publish(INGEST_OK, {"channel": channel, **result.to_dict()})
        return result

    def reject(self, error: IngestionError, channel: str = "api") -> IngestionResult:
        """Record a failure without touching geometry, editor or map."""
        self._last_error = error
        logger.warning(f"Ingestion via {channel} failed: {error.reason}")
        self.bus.publish(INGEST_FAILED, {"channel": channel, **error.to_dict()})
        return IngestionResult.failed(error)

    def render_instructions(self) -> list[RenderInstruction]:
        """Style instructions for every feature currently displayed."""
        instructions: list[RenderInstruction] = []
        for feature in self.source.current():
            instructions.extend(self.catalog.instructions_for(feature))
        return instructions

    def resize(self, width: int, height: int) -> tuple[int, int]:
        """Window resized: fit the map next to the editor pane."""
        return self.render.on_window_resize(width, height)
