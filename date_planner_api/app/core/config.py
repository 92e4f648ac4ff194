"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
server starts without any configuration in development.
"""

import os
from dataclasses import dataclass


def _int(value: str, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Date Planner API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # ``development`` leaves the front end to its own dev server;
    # ``production`` serves the pre‑built assets from ``static_dir``.
    app_env: str = os.getenv("APP_ENV", "development").lower()

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _int(os.getenv("PORT", "5000"), 5000)

    # Relative paths are resolved against the current working directory.
    static_dir: str = os.getenv("STATIC_DIR", os.path.join("dist", "public"))

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
