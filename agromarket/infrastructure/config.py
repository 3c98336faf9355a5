"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "1.0.0"
    debug: bool = False

    # Storage (no path means in-memory)
    storage_path: str | None = None
    storage_key: str = "agroMarketItems"

    # Catalog / marketplace
    max_items: int = 1000
    system_name: str = "Agricultural Direct Sales Platform"
    seed_demo_data: bool = False

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "AGROMARKET_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
