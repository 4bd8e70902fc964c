"""Shared fixtures: sample GeoJSON documents and a headless session."""

from __future__ import annotations

import json

import pytest

from geoview.config import Settings
from geoview.session import ViewerSession

POINT_DOC = (
    '{"type":"FeatureCollection","features":[{"type":"Feature","geometry":'
    '{"type":"Point","coordinates":[13.4,52.5]},"properties":{}}]}'
)

MIXED_DOC = json.dumps({
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "id": 7,
            "geometry": {"type": "Point", "coordinates": [-122.4194, 37.7749]},
            "properties": {"name": "HQ", "status": "active"},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[-122.4, 37.77], [-122.41, 37.78], [-122.42, 37.79]],
            },
            "properties": {"name": "Patrol Route"},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[-122.4, 37.77], [-122.41, 37.78], [-122.42, 37.77], [-122.4, 37.77]]],
            },
            "properties": {"name": "Zone Alpha"},
        },
    ],
})


class FakeFile:
    """In-memory stand-in for a picked or dropped file."""

    def __init__(self, data: bytes | str, content_type: str | None, filename: str = "doc.geojson"):
        self.data = data.encode("utf-8") if isinstance(data, str) else data
        self.content_type = content_type
        self.filename = filename
        self.reads = 0

    async def read(self) -> bytes:
        self.reads += 1
        return self.data


@pytest.fixture
def settings():
    return Settings(editor_width=550, window_width=1600, window_height=900)


@pytest.fixture
def session(settings):
    return ViewerSession(settings=settings)


@pytest.fixture
def make_file():
    """Factory for FakeFile instances."""
    return FakeFile


@pytest.fixture
def point_doc():
    return POINT_DOC


@pytest.fixture
def mixed_doc():
    return MIXED_DOC
