"""Application configuration"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    app_name: str = "Taskboard API"
    debug: bool = False
    log_level: str = "INFO"

    # Storage
    database_path: str = "data/taskboard.json"
    seed_sample_data: bool = True  # Seed sample boards when no data is saved yet

    # CORS
    cors_origins: List[str] = ["http://localhost:5173"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
