"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://shoestore:shoestore_dev_password@db:5432/shoestore"

    # Catalog
    catalog_page_size: int = 12
    catalog_default_sort: str = "created_at"
    catalog_default_order: str = "desc"
    home_section_limit: int = 8
    related_products_limit: int = 4

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
