"""
Application settings module.

Manages runtime configuration via environment variables using pydantic-settings.
Per-run crawl input (regions, filters, quota) lives in src.modules.input.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserSettings(BaseSettings):
    """Page renderer settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="BROWSER_", extra="ignore")

    renderer: str = "playwright"  # playwright | http
    headless: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0.0.0 Safari/537.36"
    )

    # Timeouts in seconds
    navigation_timeout: float = 60.0
    handler_timeout: float = 120.0

    # Fixed settle delays in milliseconds (listings render asynchronously)
    search_settle_ms: int = 5000
    search_scroll_settle_ms: int = 2000
    detail_settle_ms: int = 1500
    popup_settle_ms: int = 1000


class OutputSettings(BaseSettings):
    """Output sink settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="OUTPUT_", extra="ignore")

    directory: Path = Path("storage")
    dataset_file: str = "listings.jsonl"
    report_file: str = "STATS.json"

    @property
    def dataset_path(self) -> Path:
        """Full path of the listing dataset file."""
        return self.directory / self.dataset_file

    @property
    def report_path(self) -> Path:
        """Full path of the run report file."""
        return self.directory / self.report_file


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    base_url: str = "https://www.centris.ca"

    browser: BrowserSettings = BrowserSettings()
    output: OutputSettings = OutputSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
