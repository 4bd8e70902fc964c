"""StyleCatalog — static styling rules keyed by geometry kind.

Rules are evaluated in catalog order and every matching rule applies, so a
single kind can stack several techniques (polygon fill under polygon
outline). Layering is decided by render_order alone: lower draws first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from geoview.collection import GEOMETRY_KINDS, LINE, POINT, POLYGON, Feature


@dataclass(frozen=True)
class StyleRule:
    """One technique applied to one geometry kind.

    Attributes:
        kind: Geometry kind the rule matches ("point", "line", "polygon").
        technique: Rendering technique name ("fill", "solid-line", "circles").
        render_order: Compositing order; lower values are drawn under higher.
        attributes: Technique attributes (color, lineWidth, size...).
    """

    kind: str
    technique: str
    render_order: int
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.kind not in GEOMETRY_KINDS:
            raise ValueError(f"Unknown geometry kind: {self.kind}")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def matches(self, kind: str) -> bool:
        return self.kind == kind

    def to_style(self) -> dict:
        """Render the rule in the map engine's declarative style form."""
        return {
            "when": f"$geometryType == '{self.kind}'",
            "technique": self.technique,
            "renderOrder": self.render_order,
            "attr": dict(self.attributes),
        }


@dataclass(frozen=True)
class RenderInstruction:
    """A style rule resolved against a concrete feature."""

    feature_id: str
    kind: str
    technique: str
    render_order: int
    attributes: Mapping[str, Any]

    def to_dict(self) -> dict:
        return {
            "feature_id": self.feature_id,
            "kind": self.kind,
            "technique": self.technique,
            "renderOrder": self.render_order,
            "attr": dict(self.attributes),
        }


class StyleCatalog:
    """Immutable, ordered set of StyleRules."""

    def __init__(self, rules: Iterable[StyleRule]) -> None:
        rules = tuple(rules)
        seen: set[tuple[str, int]] = set()
        for rule in rules:
            key = (rule.kind, rule.render_order)
            if key in seen:
                raise ValueError(
                    f"Duplicate renderOrder {rule.render_order} for kind '{rule.kind}'"
                )
            seen.add(key)
        self._rules = rules
        self._by_kind = {
            kind: tuple(sorted((r for r in rules if r.matches(kind)), key=lambda r: r.render_order))
            for kind in GEOMETRY_KINDS
        }

    @property
    def rules(self) -> tuple[StyleRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def kinds(self) -> list[str]:
        return [kind for kind in GEOMETRY_KINDS if self._by_kind[kind]]

    def rules_for(self, kind: str) -> tuple[StyleRule, ...]:
        """All rules matching ``kind``, lowest render_order first."""
        return self._by_kind.get(kind, ())

    def instructions_for(self, feature: Feature) -> list[RenderInstruction]:
        """Render instructions for one feature, in compositing order."""
        instructions = [
            RenderInstruction(
                feature_id=feature.feature_id,
                kind=rule.kind,
                technique=rule.technique,
                render_order=rule.render_order,
                attributes=rule.attributes,
            )
            for kind in feature.kinds
            for rule in self.rules_for(kind)
        ]
        instructions.sort(key=lambda i: i.render_order)
        return instructions

    def style_set(self) -> list[dict]:
        """The whole catalog in declarative form, in catalog order."""
        return [rule.to_style() for rule in self._rules]


def default_catalog() -> StyleCatalog:
    """The stock style applied to every possible geometry kind."""
    return StyleCatalog([
        StyleRule(POLYGON, "fill", 10000, {
            "color": "#7cf",
            "transparent": True,
            "opacity": 0.8,
            "lineWidth": 1,
            "lineColor": "#003344",
        }),
        StyleRule(POLYGON, "solid-line", 10001, {
            "color": "#8df",
            "metricUnit": "Pixel",
            "lineWidth": 5,
        }),
        StyleRule(POINT, "circles", 10002, {
            "size": 10,
            "color": "5ad",
        }),
        StyleRule(LINE, "solid-line", 10000, {
            "color": "#8df",
            "metricUnit": "Pixel",
            "lineWidth": 5,
        }),
    ])
