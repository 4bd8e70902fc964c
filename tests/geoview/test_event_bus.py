"""Tests for EventBus fan-out."""

import pytest

from geoview.events import EventBus


@pytest.mark.unit
class TestEventBus:

    def test_publish_to_all_listeners(self):
        bus = EventBus()
        a, b = [], []
        bus.subscribe(a.append)
        bus.subscribe(b.append)
        bus.publish("ingest_ok", {"features": 1})
        assert a == [{"type": "ingest_ok", "data": {"features": 1}}]
        assert b[0]["type"] == "ingest_ok"

    def test_publish_without_data(self):
        bus = EventBus()
        got = []
        bus.subscribe(got.append)
        bus.publish("x")
        assert got == [{"type": "x"}]

    def test_unsubscribe(self):
        bus = EventBus()
        got = []
        unsubscribe = bus.subscribe(got.append)
        assert bus.listener_count == 1
        unsubscribe()
        unsubscribe()
        bus.publish("x")
        assert got == []
        assert bus.listener_count == 0

    def test_failing_listener_does_not_block_others(self):
        bus = EventBus()
        got = []

        def broken(msg):
            raise RuntimeError("listener down")

        bus.subscribe(broken)
        bus.subscribe(got.append)
        bus.publish("ingest_failed", {"kind": "parse_failure"})
        assert got[0]["data"]["kind"] == "parse_failure"

    def test_listener_may_unsubscribe_while_handling(self):
        bus = EventBus()
        got = []
        handle = {}

        def once(msg):
            got.append(msg)
            handle["unsubscribe"]()

        handle["unsubscribe"] = bus.subscribe(once)
        bus.publish("a")
        bus.publish("b")
        assert [m["type"] for m in got] == ["a"]
