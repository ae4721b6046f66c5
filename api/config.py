"""
Application settings (environment variables prefixed with QUIZ_, or .env)
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="QUIZ_", env_file=".env", extra="ignore")

    # Application
    APP_NAME: str = "MCQ Test API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Store
    STORE_BACKEND: Literal["mongo", "memory"] = "mongo"
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "mcq"

    # Security
    JWT_SECRET: str = Field(default="change-me-in-production", min_length=1)
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60

    # Tests
    DEFAULT_TEST_COUNT: int = 10
    MAX_TEST_COUNT: int = 100


@lru_cache
def get_settings() -> Settings:
    return Settings()
