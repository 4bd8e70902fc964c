"""Tests for GeometrySource — replace is the only mutator."""

import threading

import pytest

from geoview.collection import FeatureCollection
from geoview.decode import decode_geojson
from geoview.render import HeadlessFeaturesDataSource
from geoview.source import GeometrySource


def _collection(n: int) -> FeatureCollection:
    features = ",".join(
        '{"type":"Feature","geometry":{"type":"Point","coordinates":[%d,0]},"properties":{}}' % i
        for i in range(n)
    )
    return decode_geojson('{"type":"FeatureCollection","features":[%s]}' % features).collection


@pytest.mark.unit
class TestGeometrySource:

    def test_initially_empty(self):
        source = GeometrySource()
        assert len(source.current()) == 0
        assert source.revision == 0

    def test_replace_swaps_and_notifies(self):
        display = HeadlessFeaturesDataSource()
        source = GeometrySource(display)
        coll = _collection(2)
        source.replace(coll)
        assert source.current() is coll
        assert display.document is coll.document
        assert source.revision == 1

    def test_no_incremental_api(self):
        source = GeometrySource()
        for name in ("add", "remove", "add_feature", "remove_feature", "append"):
            assert not hasattr(source, name)

    def test_concurrent_replaces_do_not_mix(self):
        display = HeadlessFeaturesDataSource()
        source = GeometrySource(display)
        collections = [_collection(n) for n in range(1, 9)]
        threads = [threading.Thread(target=source.replace, args=(c,)) for c in collections]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert source.revision == len(collections)
        assert source.current() in collections
        assert display.document is source.current().document
