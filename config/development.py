"""Development environment configuration."""

import os

from .base import BaseConfig


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    ENV = "development"
    DEBUG = True
    TESTING = False

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///resume_studio.db")
    SQLALCHEMY_ECHO = os.getenv("SQLALCHEMY_ECHO", "False").lower() == "true"

    # CORS - Allow all origins in development
    CORS_ORIGINS = ["*"]

    # Logging
    LOG_LEVEL = "DEBUG"
    LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

    # Redis
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
