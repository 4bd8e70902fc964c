"""GeometrySource — holder of the currently displayed FeatureCollection.

``replace`` is the only mutator. There is no per-feature add/remove: a new
document always replaces the old one in full.
"""

from __future__ import annotations

import threading

from loguru import logger

from geoview.collection import FeatureCollection
from geoview.render import FeaturesDataSource


class GeometrySource:
    """Holds at most one FeatureCollection and mirrors it to the display."""

    def __init__(self, display: FeaturesDataSource | None = None) -> None:
        self._lock = threading.Lock()
        self._display = display
        self._current = FeatureCollection.empty()
        self._revision = 0

    @property
    def revision(self) -> int:
        """Number of replaces applied so far."""
        return self._revision

    def current(self) -> FeatureCollection:
        """The held collection; empty until the first replace."""
        return self._current

    def replace(self, collection: FeatureCollection) -> None:
        """Swap in a new collection and push it to the display.

        Guarded so two concurrent replaces cannot interleave: the display
        always receives the same document that ``current()`` returns.
        """
        with self._lock:
            if self._display is not None:
                self._display.set_from_geometry(collection.document)
            self._current = collection
            self._revision += 1
            revision = self._revision
        logger.debug(
            f"Geometry source at revision {revision}: {len(collection)} features"
        )
