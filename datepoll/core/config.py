"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./datepoll.db")
    DATABASE_AUTOCOMMIT: bool = os.getenv("DATABASE_AUTOCOMMIT", "false").lower() in ("1", "true", "yes")

    # Security
    ENFORCE_CREATOR_FINGERPRINT: bool = os.getenv("ENFORCE_CREATOR_FINGERPRINT", "false").lower() in ("1", "true", "yes")
    PUBLIC_ID_LENGTH: int = 8
    SECRET_TOKEN_LENGTH: int = 32

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    DEFAULT_TIMEZONE: str = "Asia/Ulaanbaatar"
    DEFAULT_LOCALE: str = "mn"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
