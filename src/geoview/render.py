"""Rendering collaborators and the redraw trigger.

The map engine itself (tiles, camera, GPU) is external. The session only
talks to these two interfaces:

    MapView             add_data_source / update / resize
    FeaturesDataSource  set_style_set / set_from_geometry

The headless implementations record what they were asked to do, so the
pipeline runs end to end without a real renderer.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from loguru import logger


class FeaturesDataSource(ABC):
    """Geometry-display collaborator fed by the GeometrySource."""

    @abstractmethod
    def set_style_set(self, style_set: list[dict]) -> None:
        """Install the style set. Called once, after the source is attached."""

    @abstractmethod
    def set_from_geometry(self, document: dict) -> None:
        """Replace everything displayed with a FeatureCollection document."""


class MapView(ABC):
    """Rendering surface collaborator."""

    @abstractmethod
    async def add_data_source(self, source: FeaturesDataSource) -> None:
        """Attach a data source; completes once the source is connected."""

    @abstractmethod
    def update(self) -> None:
        """Request a redraw. Fire-and-forget, idempotent."""

    @abstractmethod
    def resize(self, width: int, height: int) -> None:
        """Resize the drawing canvas in pixels."""


class HeadlessFeaturesDataSource(FeaturesDataSource):
    """Data source that keeps the last geometry and style set in memory."""

    def __init__(self) -> None:
        self.style_set: list[dict] | None = None
        self.document: dict | None = None
        self.style_set_calls = 0
        self.geometry_calls = 0

    def set_style_set(self, style_set: list[dict]) -> None:
        self.style_set = style_set
        self.style_set_calls += 1

    def set_from_geometry(self, document: dict) -> None:
        self.document = document
        self.geometry_calls += 1


class HeadlessMapView(MapView):
    """Map view without a canvas. Counts redraws and tracks its size."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = width
        self.height = height
        self.sources: list[FeaturesDataSource] = []
        self.updates = 0

    async def add_data_source(self, source: FeaturesDataSource) -> None:
        self.sources.append(source)

    def update(self) -> None:
        self.updates += 1

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height


class RenderSync:
    """Requests a redraw of the map after GeometrySource mutations.

    The map shares the window with the editor pane, so window resizes are
    translated into a canvas of ``width - editor_width``.
    """

    def __init__(self, map_view: MapView, editor_width: int = 0) -> None:
        self._map = map_view
        self._editor_width = editor_width
        self._lock = threading.Lock()
        self._triggers = 0

    @property
    def triggers(self) -> int:
        return self._triggers

    def trigger(self) -> None:
        with self._lock:
            self._triggers += 1
        self._map.update()

    def on_window_resize(self, width: int, height: int) -> tuple[int, int]:
        """Fit the map to the window minus the editor pane, then redraw.

        Returns:
            The (width, height) given to the map.
        """
        map_width = max(0, width - self._editor_width)
        map_height = max(0, height)
        self._map.resize(map_width, map_height)
        logger.debug(f"Map resized to {map_width}x{map_height}")
        self.trigger()
        return map_width, map_height
