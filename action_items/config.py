from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Trilium ETAPI
    trilium_url: str = "http://localhost:8080"
    trilium_token: str = ""
    request_timeout: float = 10.0

    # Dashboard
    dashboard_note_id: str = ""  # Optional; without it the default config is used
    default_template: str = "_meetingTemplate"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_url: str = "http://localhost:8000"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from ``settings.log_level`` unless *level* is given."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = get_settings()
