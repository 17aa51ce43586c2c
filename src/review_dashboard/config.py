"""Configuration management."""

from pathlib import Path
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Provider
    provider_enabled: bool = False
    provider_base_url: str = "https://api.hostaway.com/v1"
    provider_account_id: str = ""
    provider_api_key: str = ""
    request_timeout: float = 30.0
    retry_attempts: int = 3

    # Approval store
    approval_backend: Literal["file", "memory", "local"] = "file"
    approval_file: Path = Path("data/approved_reviews.json")
    local_store_path: Path = Path.home() / ".review_dashboard" / "approvals"

    # Output
    output_dir: Path = Path("output")

    # Trend heuristic: compare the mean of the newest `trend_window` reviews
    # with the mean of the `trend_window` before them
    trend_window: int = 2
    trend_threshold: float = 0.3

    # Logging
    log_level: str = "INFO"
    verbose: bool = False

    model_config = SettingsConfigDict(
        env_prefix="REVIEWS_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


# Global settings instance
settings = Settings()
