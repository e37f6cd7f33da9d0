"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from SHEET_SELECTION_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHEET_SELECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Command backend
    backend_url: str = "http://localhost:8000"
    request_timeout: float = 60.0

    # Selection restore
    restore_settle_seconds: float = 0.1
    restore_timeout_seconds: float = 1.0

    # Grid
    grid_rows: int = 100
    grid_cols: int = 26
    sheet_context_max_cells: int = 500

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
