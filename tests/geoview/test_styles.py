"""Tests for StyleCatalog — all-match lookup, layering, immutability."""

import pytest

from geoview.collection import Feature
from geoview.styles import StyleCatalog, StyleRule, default_catalog

POLYGON = {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]}


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.mark.unit
class TestDefaultCatalog:

    def test_point_is_circles_size_10(self, catalog):
        rules = catalog.rules_for("point")
        assert len(rules) == 1
        assert rules[0].technique == "circles"
        assert rules[0].attributes["size"] == 10

    def test_polygon_stacks_fill_then_outline(self, catalog):
        rules = catalog.rules_for("polygon")
        assert [(r.technique, r.render_order) for r in rules] == [
            ("fill", 10000),
            ("solid-line", 10001),
        ]

    def test_line_is_solid_line(self, catalog):
        rules = catalog.rules_for("line")
        assert [r.technique for r in rules] == ["solid-line"]
        assert rules[0].attributes["metricUnit"] == "Pixel"

    def test_unknown_kind_has_no_rules(self, catalog):
        assert catalog.rules_for("circle") == ()

    def test_kinds(self, catalog):
        assert catalog.kinds() == ["point", "line", "polygon"]

    def test_style_set_declarative_form(self, catalog):
        style_set = catalog.style_set()
        assert len(style_set) == 4
        assert style_set[0] == {
            "when": "$geometryType == 'polygon'",
            "technique": "fill",
            "renderOrder": 10000,
            "attr": {
                "color": "#7cf",
                "transparent": True,
                "opacity": 0.8,
                "lineWidth": 1,
                "lineColor": "#003344",
            },
        }


@pytest.mark.unit
class TestLayering:

    def test_polygon_instructions_in_render_order(self, catalog):
        feature = Feature("p1", POLYGON, {})
        instructions = catalog.instructions_for(feature)
        assert [(i.technique, i.render_order) for i in instructions] == [
            ("fill", 10000),
            ("solid-line", 10001),
        ]
        assert all(i.feature_id == "p1" for i in instructions)

    def test_order_independent_of_declaration(self):
        outline = StyleRule("polygon", "solid-line", 2)
        fill = StyleRule("polygon", "fill", 1)
        catalog = StyleCatalog([outline, fill])
        assert [r.technique for r in catalog.rules_for("polygon")] == ["fill", "solid-line"]
        # catalog order itself is preserved
        assert catalog.rules == (outline, fill)

    def test_null_geometry_has_no_instructions(self, catalog):
        assert catalog.instructions_for(Feature("n", None, {})) == []

    def test_geometry_collection_gets_each_kind(self, catalog):
        geometry = {
            "type": "GeometryCollection",
            "geometries": [POLYGON, {"type": "Point", "coordinates": [0, 0]}],
        }
        techniques = [i.technique for i in catalog.instructions_for(Feature("g", geometry, {}))]
        assert techniques == ["fill", "solid-line", "circles"]


@pytest.mark.unit
class TestImmutability:

    def test_duplicate_render_order_rejected(self):
        with pytest.raises(ValueError):
            StyleCatalog([
                StyleRule("polygon", "fill", 5),
                StyleRule("polygon", "solid-line", 5),
            ])

    def test_same_order_different_kinds_allowed(self, catalog):
        assert catalog.rules_for("line")[0].render_order == catalog.rules_for("polygon")[0].render_order

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            StyleRule("circle", "circles", 1)

    def test_rule_attributes_read_only(self, catalog):
        rule = catalog.rules_for("point")[0]
        with pytest.raises(TypeError):
            rule.attributes["size"] = 99

    def test_rule_frozen(self, catalog):
        rule = catalog.rules_for("point")[0]
        with pytest.raises(AttributeError):
            rule.render_order = 1

    def test_style_set_copies_attributes(self, catalog):
        catalog.style_set()[2]["attr"]["size"] = 99
        assert catalog.rules_for("point")[0].attributes["size"] == 10

    def test_no_mutation_api(self, catalog):
        assert not hasattr(catalog, "add_rule")
        assert isinstance(catalog.rules, tuple)
