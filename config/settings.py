"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from pathlib import Path
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Every field has a default so the app boots without a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # DATASETS
    # ===================
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the mercuriale JSON files"
    )
    data_base_url: Optional[str] = Field(
        None,
        description="When set, mercuriales are fetched over HTTP from this base URL"
    )
    folkestone_file: str = Field(
        default="mercuriale-folkestone.json",
        description="Folkestone mercuriale file name"
    )
    vendome_file: str = Field(
        default="mercuriale-vendome.json",
        description="Vendome mercuriale file name"
    )
    washington_file: str = Field(
        default="mercuriale-washington.json",
        description="Washington mercuriale file name"
    )
    load_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="HTTP timeout per mercuriale fetch"
    )

    # ===================
    # SEARCH / ORDER
    # ===================
    default_source: str = Field(
        default="folkestone",
        pattern="^(folkestone|vendome|washington)$",
        description="Mercuriale searched when the session starts"
    )
    min_query_length: int = Field(
        default=2,
        ge=1,
        le=20,
        description="Shortest trimmed query that triggers a search"
    )
    export_filename: str = Field(
        default="ma_commande.csv",
        min_length=1,
        description="File name offered for the CSV download"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5500",  # Live Server
        ],
        description="Origins allowed to call the API from a browser"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def source_files(self) -> dict[str, str]:
        """File name per source tag, in load order."""
        return {
            "folkestone": self.folkestone_file,
            "vendome": self.vendome_file,
            "washington": self.washington_file,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
