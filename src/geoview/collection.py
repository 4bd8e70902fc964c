"""Feature and FeatureCollection for the ingestion pipeline.

The core treats a document as an opaque payload: properties are carried
through untouched, and geometry is only inspected for its kind, which
drives styling. Coordinates stay in GeoJSON convention: [lng, lat(, alt)].
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator

POINT = "point"
LINE = "line"
POLYGON = "polygon"

GEOMETRY_KINDS = (POINT, LINE, POLYGON)

# GeoJSON geometry type -> styling kind
_KIND_BY_TYPE = {
    "Point": POINT,
    "MultiPoint": POINT,
    "LineString": LINE,
    "MultiLineString": LINE,
    "Polygon": POLYGON,
    "MultiPolygon": POLYGON,
}

GEOMETRY_TYPES = frozenset(_KIND_BY_TYPE) | {"GeometryCollection"}


def geometry_kinds(geometry: dict | None) -> tuple[str, ...]:
    """Styling kinds of a GeoJSON geometry, in first-seen order.

    A GeometryCollection contributes the kinds of its members; a null
    geometry has none.
    """
    if not geometry:
        return ()
    gtype = geometry.get("type")
    if gtype == "GeometryCollection":
        kinds: list[str] = []
        for member in geometry.get("geometries") or []:
            for kind in geometry_kinds(member):
                if kind not in kinds:
                    kinds.append(kind)
        return tuple(kinds)
    kind = _KIND_BY_TYPE.get(gtype)
    return (kind,) if kind else ()


@dataclass(frozen=True)
class Feature:
    """A single feature within a collection.

    Attributes:
        feature_id: The GeoJSON ``id`` as a string, or ``feature-<index>``.
        geometry: Raw GeoJSON geometry mapping, or None for a null geometry.
        properties: Free-form properties, never interpreted by the core.
    """

    feature_id: str
    geometry: dict | None
    properties: dict = field(default_factory=dict)

    @property
    def geometry_type(self) -> str | None:
        return self.geometry.get("type") if self.geometry else None

    @property
    def kinds(self) -> tuple[str, ...]:
        return geometry_kinds(self.geometry)


@dataclass(frozen=True)
class FeatureCollection:
    """A decoded GeoJSON document, normalized to a collection of features.

    Attributes:
        features: The features, in document order.
        document: The FeatureCollection mapping handed to the renderer.
    """

    features: tuple[Feature, ...] = ()
    document: dict = field(
        default_factory=lambda: {"type": "FeatureCollection", "features": []}
    )

    @classmethod
    def empty(cls) -> FeatureCollection:
        return cls()

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def kinds(self) -> set[str]:
        """Set of geometry kinds present in the collection."""
        return {kind for feature in self.features for kind in feature.kinds}

    def count_by_kind(self) -> dict[str, int]:
        """Number of features carrying each geometry kind."""
        counts: Counter[str] = Counter()
        for feature in self.features:
            counts.update(feature.kinds)
        return {kind: counts.get(kind, 0) for kind in GEOMETRY_KINDS}
