"""API routers."""

from geoview_app.routers.viewer import router as viewer_router

__all__ = ["viewer_router"]
