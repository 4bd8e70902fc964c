"""Ingestion failure taxonomy.

Every failure is recoverable: the session keeps the prior document and the
user re-initiates ingestion. Nothing here is fatal.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for anything that stops a document from being applied."""

    kind = "ingestion"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def to_dict(self) -> dict:
        return {"kind": self.kind, "reason": self.reason}


class UnsupportedFileType(IngestionError):
    """File content type is outside the accepted GeoJSON/JSON set."""

    kind = "unsupported_file_type"

    def __init__(self, content_type: str | None) -> None:
        super().__init__(f"Unsupported file type: {content_type or 'unknown'}")
        self.content_type = content_type


class ParseFailure(IngestionError):
    """Raw text is not valid JSON, or not a GeoJSON document."""

    kind = "parse_failure"

    def __init__(
        self, reason: str, line: int | None = None, column: int | None = None
    ) -> None:
        super().__init__(reason)
        self.line = line
        self.column = column

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.line is not None:
            d["line"] = self.line
            d["column"] = self.column
        return d


class ReadFailure(IngestionError):
    """File could not be read or its bytes are not text."""

    kind = "read_failure"
