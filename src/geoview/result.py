"""IngestionResult — outcome of the shared decode step."""

from __future__ import annotations

from dataclasses import dataclass

from geoview.collection import FeatureCollection
from geoview.errors import IngestionError


@dataclass(frozen=True)
class IngestionResult:
    """Either Ok(collection, text) or Failed(error), never both.

    Use the ``succeeded`` / ``failed`` constructors rather than building
    one directly.
    """

    collection: FeatureCollection | None = None
    text: str | None = None
    error: IngestionError | None = None

    def __post_init__(self) -> None:
        if (self.error is None) == (self.collection is None):
            raise ValueError("IngestionResult needs exactly one of collection or error")

    @classmethod
    def succeeded(cls, collection: FeatureCollection, text: str) -> IngestionResult:
        return cls(collection=collection, text=text)

    @classmethod
    def failed(cls, error: IngestionError) -> IngestionResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": True,
            "features": len(self.collection),
            "kinds": self.collection.count_by_kind(),
        }
