"""
Backend configuration with environment variable support.
Orders are kept in memory only; nothing here points at a database.
"""
from pathlib import Path
from functools import lru_cache
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Pizzeria"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    FRONTEND_PORT: int = 8501

    # Order handling
    ORDER_FAILURE_RATE: float = Field(default=0.0, ge=0.0, le=1.0)  # Share of orders rejected
    ORDER_RANDOM_SEED: Optional[int] = None  # Seed for reproducible rejections
    MAX_RECENT_ORDERS: int = 100  # Accepted orders kept for lookup
    REQUIRE_TOPPING: bool = False  # Reject orders without toppings

    # Logging
    LOG_DIR: Path = Path("./data/logs")
    LOG_MAX_BYTES: int = 10_000_000
    LOG_BACKUP_COUNT: int = 3

    # CORS (comma-separated string in .env, parsed to list)
    CORS_ORIGINS: str = "http://localhost:8501,http://127.0.0.1:8501"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.DEBUG

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS string into list."""
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()
