"""Application configuration using Pydantic Settings."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from fairmines.constants import (
    BALANCE_STORAGE_KEY,
    DEFAULT_BET,
    DEFAULT_HOUSE_EDGE,
    DEFAULT_MINES,
    MAX_HOUSE_EDGE,
    STARTING_BALANCE,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Application
    app_env: str = "dev"
    app_version: str = "1"
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # CORS
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Balance persistence
    balance_file: str = "balance.json"
    balance_storage_key: str = BALANCE_STORAGE_KEY
    starting_balance: float = STARTING_BALANCE

    # Round defaults
    default_bet: float = DEFAULT_BET
    default_mines: int = DEFAULT_MINES
    default_house_edge: float = DEFAULT_HOUSE_EDGE  # percent
    max_house_edge: float = MAX_HOUSE_EDGE  # percent

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
