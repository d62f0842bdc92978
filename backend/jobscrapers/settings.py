"""
Runtime Configuration
Loads settings from environment variables with sensible defaults.

Per-source constants (URLs, selectors, page limits) live in config.py;
this module only covers how the browser and logging behave on this host.
"""

from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path


class Settings(BaseSettings):
    """Scraper settings loaded from environment variables."""

    # Browser Configuration
    scraper_headless: bool = True
    scraper_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    scraper_viewport_width: int = 1366
    scraper_viewport_height: int = 768
    scraper_locale: str = "en-US"

    # Fan-out Configuration
    scraper_parallel: bool = False

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[Path] = None

    class Config:
        # Only load .env if it exists to avoid permission errors
        env_file = ".env" if Path(".env").exists() else None
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


# Global settings instance
settings = Settings()
