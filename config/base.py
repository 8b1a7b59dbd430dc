"""Base configuration for all environments."""

import os
from typing import List


class BaseConfig:
    """Base configuration class with common settings."""

    ENV: str = "development"

    # Flask Configuration
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    AUTH_TOKEN_SECRET: str = os.getenv("AUTH_TOKEN_SECRET", "dev-auth-token-secret")

    # Database Configuration
    SQLALCHEMY_DATABASE_URI: str = os.getenv("DATABASE_URL", "sqlite:///resume_studio.db")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_ECHO: bool = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
    }

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]
    CORS_EXPOSE_HEADERS: List[str] = ["Content-Disposition"]
    CORS_SUPPORTS_CREDENTIALS: bool = True

    # Redis Configuration
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Rate limiting
    RATELIMIT_ENABLED: bool = True
    RATELIMIT_STORAGE_URI: str = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    ANALYSIS_RATE_LIMIT: str = os.getenv("ANALYSIS_RATE_LIMIT", "10 per minute")

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")

    # Editor sessions and export
    EDITOR_SESSION_TTL_SECONDS: int = int(os.getenv("EDITOR_SESSION_TTL_SECONDS", 86400))
    EXPORT_LOCK_TTL_SECONDS: int = int(os.getenv("EXPORT_LOCK_TTL_SECONDS", 60))

    # Server Configuration
    JSON_SORT_KEYS: bool = False
