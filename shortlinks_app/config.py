from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path


STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Shortlinks"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Database (single SQLite file holding the links table)
    database_url: str = "sqlite:///./data/shortlinks.db"

    # Shortlinks specific
    base_url: Optional[str] = None  # None: derive from the incoming request
    short_code_length: int = 6
    max_retries: int = 5
    list_limit: int = 100
    custom_code_max_length: int = 64

    # Static pages (home, stats, not found)
    static_dir: Path = STATIC_DIR

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


def load_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()
