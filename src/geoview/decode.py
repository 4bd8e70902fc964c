"""Decode raw GeoJSON (RFC 7946) text into a FeatureCollection.

This is the one decode path shared by every ingestion channel. A document
is accepted whole or rejected whole: no feature is skipped or repaired.
FeatureCollection, Feature and bare geometry documents are accepted; the
latter two are wrapped into a one-feature collection.
"""

from __future__ import annotations

import json
import math

from geoview.collection import GEOMETRY_TYPES, Feature, FeatureCollection
from geoview.errors import ParseFailure, ReadFailure
from geoview.result import IngestionResult

# Deepest object/array nesting accepted. A MultiPolygon feature inside a
# collection sits at depth 8, so this leaves ample room for properties.
MAX_NESTING = 64


def decode_geojson(raw: str | bytes) -> IngestionResult:
    """Decode raw GeoJSON content.

    Args:
        raw: Document text, or the bytes of a file read (UTF-8, BOM allowed).

    Returns:
        Ok with the normalized collection and the text that was decoded, or
        Failed with a ParseFailure / ReadFailure.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            text = bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            return IngestionResult.failed(ReadFailure(f"File is not UTF-8 text: {e.reason}"))
    else:
        text = raw

    try:
        data = json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as e:
        return IngestionResult.failed(ParseFailure(f"Invalid JSON: {e.msg}", e.lineno, e.colno))
    except ValueError as e:
        return IngestionResult.failed(ParseFailure(f"Invalid JSON: {e}"))
    except RecursionError:
        return IngestionResult.failed(_too_deep())
    except TypeError:
        return IngestionResult.failed(ParseFailure("No document text"))

    if _nesting_depth(data) > MAX_NESTING:
        return IngestionResult.failed(_too_deep())

    try:
        collection = _to_collection(data)
    except ParseFailure as e:
        return IngestionResult.failed(e)
    return IngestionResult.succeeded(collection, text)


def _reject_constant(name: str) -> float:
    # NaN / Infinity / -Infinity are Python extensions, not JSON
    raise ValueError(f"non-finite number {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"number out of range {literal}")
    return value


def _too_deep() -> ParseFailure:
    return ParseFailure(f"Document nested too deeply (limit {MAX_NESTING})")


def _nesting_depth(data: object) -> int:
    """Object/array nesting depth, stopping early once past MAX_NESTING."""
    deepest = 0
    stack = [(data, 1)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        deepest = max(deepest, depth)
        if deepest > MAX_NESTING:
            break
        stack.extend((child, depth + 1) for child in children)
    return deepest


def _to_collection(data: object) -> FeatureCollection:
    if not isinstance(data, dict):
        raise ParseFailure(f"Expected a GeoJSON object, got {type(data).__name__}")

    doc_type = data.get("type")
    if doc_type == "FeatureCollection":
        raw_features = data.get("features")
        if not isinstance(raw_features, list):
            raise ParseFailure("FeatureCollection.features must be an array")
        features = tuple(_parse_feature(raw, idx) for idx, raw in enumerate(raw_features))
        return FeatureCollection(features=features, document=data)

    if doc_type == "Feature":
        feature = _parse_feature(data, 0)
        return FeatureCollection(
            features=(feature,),
            document={"type": "FeatureCollection", "features": [data]},
        )

    if doc_type in GEOMETRY_TYPES:
        _check_geometry(data, 0)
        wrapped = {"type": "Feature", "geometry": data, "properties": {}}
        return FeatureCollection(
            features=(Feature("feature-0", data, {}),),
            document={"type": "FeatureCollection", "features": [wrapped]},
        )

    raise ParseFailure(f"Not a GeoJSON type: {doc_type!r}")


def _parse_feature(raw: object, idx: int) -> Feature:
    """Parse a single GeoJSON Feature dict into a Feature."""
    if not isinstance(raw, dict) or raw.get("type") != "Feature":
        raise ParseFailure(f"features[{idx}] is not a Feature object")

    geometry = raw.get("geometry")
    if geometry is not None:
        _check_geometry(geometry, idx)

    properties = raw.get("properties")
    if properties is None:
        properties = {}
    elif not isinstance(properties, dict):
        raise ParseFailure(f"features[{idx}].properties must be an object or null")

    feature_id = raw.get("id", f"feature-{idx}")
    if not isinstance(feature_id, str):
        feature_id = str(feature_id)

    return Feature(feature_id=feature_id, geometry=geometry, properties=properties)


def _check_geometry(geometry: object, idx: int) -> None:
    if not isinstance(geometry, dict):
        raise ParseFailure(f"features[{idx}].geometry must be an object or null")
    gtype = geometry.get("type")
    if gtype not in GEOMETRY_TYPES:
        raise ParseFailure(f"features[{idx}] has unknown geometry type {gtype!r}")
    if gtype == "GeometryCollection":
        members = geometry.get("geometries")
        if not isinstance(members, list):
            raise ParseFailure(f"features[{idx}].geometry.geometries must be an array")
        for member in members:
            _check_geometry(member, idx)
    elif geometry.get("coordinates") is None:
        raise ParseFailure(f"features[{idx}].geometry has no coordinates")
