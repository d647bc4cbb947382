"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHOPCATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Authentication: requests bearing this key read as the admin audience
    admin_api_key: str = "dev-admin-key-change-in-production"

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    # Demo catalog
    seed_demo_catalog: bool = True
    seed: int = 42

    # Logging
    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
