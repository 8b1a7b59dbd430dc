"""Testing environment configuration."""

from .base import BaseConfig


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    ENV = "testing"
    DEBUG = True
    TESTING = True

    SECRET_KEY = "test-secret-key"
    AUTH_TOKEN_SECRET = "test-auth-token-secret"

    # Use in-memory SQLite for tests
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # CORS - Allow all for testing
    CORS_ORIGINS = ["*"]

    # Logging
    LOG_LEVEL = "DEBUG"
    LOG_FORMAT = "text"

    # No Redis: editor sessions and locks live in an in-process fakeredis
    REDIS_URL = None

    RATELIMIT_ENABLED = False
