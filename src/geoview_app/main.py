"""GeoView - drop a GeoJSON document, see it on the map.

Main FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from geoview.config import Settings, settings as default_settings
from geoview.session import ViewerSession
from geoview_app.routers import viewer_router

VERSION = "0.1.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around a fresh ViewerSession."""
    settings = settings if settings is not None else default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info(f"{settings.app_name} v{VERSION} starting")
        await app.state.session.start()
        logger.info(f"{settings.app_name} online (editor width {settings.editor_width}px)")
        yield
        logger.info(f"{settings.app_name} shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Interactive GeoJSON viewer",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.session = ViewerSession(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(viewer_router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "operational", "version": VERSION, "system": settings.app_name}

    return app


app = create_app()
