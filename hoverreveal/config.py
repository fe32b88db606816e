"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

VERSION = "0.1.0"


class Settings(BaseSettings):
    hoverreveal_env: str = "development"
    hoverreveal_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Scene sources (path or http(s) URL); empty = start without a scene
    base_image: str = ""
    overlay_image: str = ""
    catalog_path: str = ""
    fetch_timeout_s: float = 10.0

    max_sessions: int = 256

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def scene_configured(self) -> bool:
        return bool(self.base_image or self.overlay_image)


settings = Settings()
