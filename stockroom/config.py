from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Stockroom Inventory Tracker"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./stockroom.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security (external identity provider)
    # ==============================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None
    CORS_ORIGINS: str = "*"

    # ==============================
    # Repository
    # ==============================
    STORE_TIMEOUT_SECONDS: float = 10.0
    STOCK_UPDATE_MAX_ATTEMPTS: int = 5
    SEED_LOCK_STALE_SECONDS: int = 60
    LOW_STOCK_NOTIFICATIONS: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
