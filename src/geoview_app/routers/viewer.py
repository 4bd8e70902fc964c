"""Viewer API — the page surface of a ViewerSession over HTTP.

File picker, drop target, editor pane and window events each map to an
endpoint; all ingestion goes through the session's channels. Session events
are pushed to the page over the /events websocket.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from fastapi import (
    APIRouter,
    File,
    HTTPException,
    Request,
    UploadFile,
    WebSocket,
    WebSocketDisconnect,
)
from loguru import logger
from pydantic import BaseModel

from geoview.editor import PLACEHOLDER
from geoview.errors import UnsupportedFileType
from geoview.indicator import DRAG_EVENTS
from geoview.result import IngestionResult
from geoview.session import ViewerSession

router = APIRouter(prefix="/api/viewer", tags=["viewer"])


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class EditorText(BaseModel):
    """Text typed into the editor pane."""
    text: str


class EditorState(BaseModel):
    text: str
    applied_text: str
    dirty: bool
    placeholder: str


class IngestResponse(BaseModel):
    """Outcome of a successful ingestion."""
    ok: bool
    features: int
    kinds: dict[str, int]
    revision: int


class WindowSize(BaseModel):
    width: int
    height: int


class StatusResponse(BaseModel):
    started: bool
    revision: int
    redraws: int
    drop_indicator: bool
    last_error: Optional[dict] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _get_session(request: Request) -> ViewerSession:
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(503, "Viewer session not available")
    return session


def _respond(
    session: ViewerSession,
    result: IngestionResult | None,
    content_type: str | None = None,
) -> IngestResponse:
    if result is None:
        raise HTTPException(415, UnsupportedFileType(content_type).to_dict())
    if not result.ok:
        raise HTTPException(422, result.error.to_dict())
    return IngestResponse(revision=session.source.revision, **result.to_dict())


def _check_size(session: ViewerSession, upload: UploadFile) -> None:
    limit = session.settings.max_upload_bytes
    if upload.size is not None and upload.size > limit:
        logger.warning(f"Upload {upload.filename!r} rejected: {upload.size} bytes > {limit}")
        raise HTTPException(413, f"File larger than {limit} bytes")


# ---------------------------------------------------------------------------
# Map + styling
# ---------------------------------------------------------------------------

@router.get("/config")
async def get_config(request: Request):
    """Initial camera, layout and info text for the page."""
    s = _get_session(request).settings
    return {
        "camera": {"lat": s.camera_lat, "lng": s.camera_lng, "zoom": s.camera_zoom},
        "editor_width": s.editor_width,
        "accepted_content_types": s.accepted_content_types,
        "info": s.info_text,
    }


@router.get("/styles")
async def get_styles(request: Request):
    """The style set installed on the features data source."""
    return _get_session(request).catalog.style_set()


@router.get("/features")
async def get_features(request: Request):
    """The currently displayed FeatureCollection document."""
    session = _get_session(request)
    current = session.source.current()
    return {
        "revision": session.source.revision,
        "kinds": current.count_by_kind(),
        "document": current.document,
    }


@router.get("/render")
async def get_render_instructions(request: Request):
    """Per-feature style instructions, in compositing order."""
    return [i.to_dict() for i in _get_session(request).render_instructions()]


@router.get("/status", response_model=StatusResponse)
async def get_status(request: Request):
    session = _get_session(request)
    error = session.last_error
    return StatusResponse(
        started=session.started,
        revision=session.source.revision,
        redraws=session.render.triggers,
        drop_indicator=session.drop.indicator.visible,
        last_error=error.to_dict() if error is not None else None,
    )


@router.post("/resize")
async def resize(body: WindowSize, request: Request):
    """Window resized: the map takes the width left of the editor pane."""
    width, height = _get_session(request).resize(body.width, body.height)
    return {"map_width": width, "map_height": height}


# ---------------------------------------------------------------------------
# Editor pane (manual channel)
# ---------------------------------------------------------------------------

@router.get("/editor", response_model=EditorState)
async def get_editor(request: Request):
    editor = _get_session(request).editor
    return EditorState(
        text=editor.current_text(),
        applied_text=editor.applied_text,
        dirty=editor.is_dirty,
        placeholder=PLACEHOLDER,
    )


@router.put("/editor", response_model=EditorState)
async def edit_text(body: EditorText, request: Request):
    """User typing. Does not ingest."""
    editor = _get_session(request).editor
    editor.edit(body.text)
    return EditorState(
        text=editor.current_text(),
        applied_text=editor.applied_text,
        dirty=editor.is_dirty,
        placeholder=PLACEHOLDER,
    )


@router.post("/editor/submit", response_model=IngestResponse)
async def submit_editor(request: Request):
    """The Update button: ingest whatever the editor shows right now."""
    session = _get_session(request)
    return _respond(session, session.manual.submit())


# ---------------------------------------------------------------------------
# File picker + drag and drop
# ---------------------------------------------------------------------------

@router.post("/upload", response_model=IngestResponse)
async def upload_file(request: Request, file: UploadFile = File(...)):
    """File picker selection."""
    session = _get_session(request)
    _check_size(session, file)
    result = await session.file_picker.file_selected(file)
    return _respond(session, result, file.content_type)


@router.post("/drop", response_model=IngestResponse)
async def drop_files(request: Request, files: list[UploadFile] = File(...)):
    """Files dropped on the window. Only the first is used."""
    session = _get_session(request)
    if files:
        _check_size(session, files[0])
    result = await session.drop.files_dropped(files)
    return _respond(session, result, files[0].content_type if files else None)


@router.post("/drag/{event}")
async def drag_event(event: str, request: Request):
    """Drag gesture over the window; drives the drop indicator."""
    if event not in DRAG_EVENTS:
        raise HTTPException(400, f"Unknown drag event: {event}")
    visible = _get_session(request).drop.drag_event(event)
    return {"visible": visible}


@router.get("/drag")
async def get_drag_state(request: Request):
    return {"visible": _get_session(request).drop.indicator.visible}


# ---------------------------------------------------------------------------
# Live events (ingest outcomes, drop indicator)
# ---------------------------------------------------------------------------

@router.websocket("/events")
async def viewer_events(websocket: WebSocket):
    """Push session events to the page as they happen.

    Messages are ``{"type": "ingest_ok" | "ingest_failed" | "drop_indicator",
    "data": {...}}``. Anything the client sends is ignored.
    """
    session = getattr(websocket.app.state, "session", None)
    if session is None:
        await websocket.close(code=1011)
        return

    loop = asyncio.get_running_loop()
    outbox: asyncio.Queue[dict] = asyncio.Queue(maxsize=100)

    def enqueue(msg: dict) -> None:
        if outbox.full():
            outbox.get_nowait()
        outbox.put_nowait(msg)

    def forward(msg: dict) -> None:
        # Publishers may run on a worker thread; hand over to the socket's loop
        loop.call_soon_threadsafe(enqueue, msg)

    # Subscribe before accepting so nothing published after the handshake is missed
    unsubscribe = session.bus.subscribe(forward)
    await websocket.accept()

    async def pump() -> None:
        while True:
            await websocket.send_json(await outbox.get())

    sender = asyncio.create_task(pump())
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Viewer event socket closed")
    finally:
        unsubscribe()
        sender.cancel()
