# feedback_forms/core/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application Settings"""

    # Database
    DATABASE_URL: str

    # JWT
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30

    # Public sharing links
    PUBLIC_TOKEN_BYTES: int = 8
    PUBLIC_TOKEN_MAX_ATTEMPTS: int = 5

    # Administrator accounts
    PASSWORD_MIN_LENGTH: int = 6

    # HTTP
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


# Singleton instance
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Default instance for backwards compatibility
settings = get_settings()
