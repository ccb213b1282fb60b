# app/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import validator
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from .env"""

    # === Database ===
    DATABASE_URL: str = "sqlite+aiosqlite:///./storefront.db"

    @validator("DATABASE_URL")
    def validate_database_url(cls, v):
        """Ensure database URL is safe for current environment"""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and "localhost" in v:
            raise ValueError("Production environment cannot use localhost database!")
        return v

    # === Sessions ===
    REDIS_URL: str = "redis://localhost:6379/0"
    SESSION_BACKEND: str = "redis"   # 'redis' | 'memory'
    SESSION_COOKIE_NAME: str = "authToken"
    SESSION_TTL_SECONDS: Optional[int] = None   # None keeps sessions until sign-out

    @validator("SESSION_BACKEND")
    def validate_session_backend(cls, v):
        v = v.lower()
        if v not in ("redis", "memory"):
            raise ValueError("SESSION_BACKEND must be 'redis' or 'memory'")
        return v

    # === Cookies ===
    COOKIE_SAMESITE: str = "lax"   # 'lax' | 'strict' | 'none'
    COOKIE_DOMAIN: Optional[str] = None

    # === Security ===
    BCRYPT_ROUNDS: int = 10

    # === CORS ===
    ALLOWED_ORIGINS: List[str] = ["http://localhost:8080", "http://0.0.0.0:8080"]
    ALLOWED_METHODS: List[str] = ["GET", "POST", "OPTIONS", "PUT", "PATCH", "DELETE"]
    ALLOWED_HEADERS: List[str] = ["X-Requested-With", "content-type"]

    # === System ===
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True

    @property
    def cookie_secure(self) -> bool:
        return self.ENVIRONMENT.lower() != "development"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Create a global settings instance
settings = Settings()
