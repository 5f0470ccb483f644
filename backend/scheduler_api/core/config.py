from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    PROJECT_NAME: str = "Scheduling API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "local"
    DATABASE_URL: str = "sqlite:///./scheduler.db"
    LOG_LEVEL: str = "INFO"
    DEFAULT_PAGE_SIZE: int = 20
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: List[str] | str) -> List[str]:
        """Allow both comma-separated strings and list inputs."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
