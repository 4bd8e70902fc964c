"""Incoming files and content-type gating.

A file is anything with ``filename``, ``content_type`` and an awaitable
``read()`` returning bytes. FastAPI's UploadFile already has that shape;
LocalFile adapts a path on disk.
"""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path
from typing import Iterable, Protocol

GEOJSON_CONTENT_TYPES = ("application/geo+json", "application/json")

_SUFFIX_TYPES = {
    ".geojson": "application/geo+json",
    ".json": "application/json",
}


class IncomingFile(Protocol):
    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


class LocalFile:
    """A file on disk, read off the event loop."""

    def __init__(self, path: str | Path, content_type: str | None = None) -> None:
        self.path = Path(path)
        self.filename = self.path.name
        self.content_type = content_type or guess_content_type(self.path)

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r}, {self.content_type!r})"


def guess_content_type(path: str | Path) -> str | None:
    suffix = Path(path).suffix.lower()
    if suffix in _SUFFIX_TYPES:
        return _SUFFIX_TYPES[suffix]
    content_type, _ = mimetypes.guess_type(str(path))
    return content_type


def is_accepted(content_type: str | None, accepted: Iterable[str] = GEOJSON_CONTENT_TYPES) -> bool:
    """True when ``content_type`` is one of ``accepted``.

    Media type parameters (``; charset=utf-8``) and case are ignored.
    """
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in {a.lower() for a in accepted}
