"""GeoView — interactive GeoJSON ingestion for a map view.

Documents arrive from a file picker, a drop, or the editor pane, pass
through one decode step, and replace the displayed features as a unit.
"""

from geoview.collection import Feature, FeatureCollection
from geoview.errors import IngestionError, ParseFailure, ReadFailure, UnsupportedFileType
from geoview.result import IngestionResult
from geoview.session import ViewerSession
from geoview.styles import StyleCatalog, StyleRule, default_catalog

__all__ = [
    "Feature",
    "FeatureCollection",
    "IngestionError",
    "IngestionResult",
    "ParseFailure",
    "ReadFailure",
    "StyleCatalog",
    "StyleRule",
    "UnsupportedFileType",
    "ViewerSession",
    "default_catalog",
]
