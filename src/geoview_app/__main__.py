"""Run the viewer: ``python -m geoview_app`` or the ``geoview`` script."""

import sys

import uvicorn
from loguru import logger

from geoview.config import settings


def configure_logging(level: str) -> None:
    """Send loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main() -> None:
    configure_logging(settings.log_level)
    uvicorn.run(
        "geoview_app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
