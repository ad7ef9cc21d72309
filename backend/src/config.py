"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment Variables:
        DATABASE_URL: SQLAlchemy connection string
        CATALOG_SOURCE: Where SKUs and aliases come from (csv | database)
        PRICE_MASTER_PATH: Price master CSV (csv source)
        SKU_ALIASES_PATH: SKU alias CSV (csv source)
        MAPPING_CONFIG_PATH: JSON file with a "mapping" section
        MAPPING_MAX_WORKERS: Thread pool size for batch mapping (1 = sequential)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON logs (default True)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./quoteflow.db"

    # Catalog & aliases
    CATALOG_SOURCE: Literal["csv", "database"] = "csv"
    PRICE_MASTER_PATH: str = "./data/price_master.csv"
    SKU_ALIASES_PATH: str = "./data/sku_aliases.csv"

    # Mapping
    MAPPING_CONFIG_PATH: Optional[str] = "./data/config.json"
    MAPPING_MAX_WORKERS: int = 1

    # Application
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
