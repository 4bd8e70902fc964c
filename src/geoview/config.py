"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Viewer settings loaded from GEOVIEW_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GEOVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "GeoView"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Layout: the editor pane takes a fixed strip on the right of the window
    editor_width: int = 550
    window_width: int = 1600
    window_height: int = 900

    # Ingestion
    accepted_content_types: list[str] = ["application/geo+json", "application/json"]
    max_upload_bytes: int = 50 * 1024 * 1024

    # Initial camera
    camera_lat: float = 30.0
    camera_lng: float = 0.0
    camera_zoom: float = 2.0

    info_text: str = "Drag and drop a GeoJSON or browse a local one."


settings = Settings()
