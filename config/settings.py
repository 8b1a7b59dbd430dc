"""Application settings using Pydantic for environment variable validation."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields from .env
    )

    # Environment
    environment: str = "development"
    debug: bool = False
    testing: bool = False

    # Flask
    secret_key: str = "dev-secret-key"

    # Identity tokens issued by the OAuth front end
    auth_token_secret: str = "dev-auth-token-secret"

    # Database
    database_url: str = "sqlite:///resume_studio.db"

    # Redis (empty: in-process fakeredis)
    redis_url: str = "redis://localhost:6379/0"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # CORS
    cors_origins: str = "*"

    # Google Gemini API Configuration
    google_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # Resume analysis
    analysis_rate_limit: str = "10 per minute"
    analysis_cache_ttl_seconds: int = 3600
    analysis_breaker_fail_max: int = 5
    analysis_breaker_reset_timeout: int = 180

    # Editor
    editor_session_ttl_seconds: int = 86400
    export_lock_ttl_seconds: int = 60

    # Pixels per point when rasterizing the rendered resume for PDF export
    capture_scale: float = 2.0

    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing."""
        return self.testing or self.environment == "testing"

    @field_validator("environment")
    @classmethod
    def environment_must_be_valid(cls, v):
        """Validate environment value."""
        valid_envs = ["development", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_valid(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def log_format_must_be_valid(cls, v):
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()

    @field_validator("capture_scale")
    @classmethod
    def capture_scale_must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("Capture scale must be positive")
        return v

    def display_config(self) -> None:
        """Display all environment variables in a formatted table at startup."""

        def mask_sensitive(key: str, value: str) -> str:
            """Mask sensitive values like passwords and API keys."""
            sensitive_keywords = ['password', 'secret', 'key', 'token']
            if any(kw in key.lower() for kw in sensitive_keywords):
                if value and len(value) > 8:
                    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"
                elif value:
                    return '*' * len(value)
            return value

        # Group settings by category
        categories = {
            "🔧 Core": ["environment", "debug", "testing"],
            "🗄️ Database": ["database_url"],
            "📦 Redis": ["redis_url"],
            "🌐 Server": ["host", "port"],
            "📝 Logging": ["log_level", "log_format"],
            "🔗 CORS": ["cors_origins"],
            "🔒 Security": ["secret_key", "auth_token_secret"],
            "🤖 AI/Analysis": [
                "google_api_key", "gemini_model", "analysis_rate_limit",
                "analysis_cache_ttl_seconds", "analysis_breaker_fail_max",
                "analysis_breaker_reset_timeout",
            ],
            "📝 Editor/Export": ["editor_session_ttl_seconds", "export_lock_ttl_seconds", "capture_scale"],
        }

        print("\n" + "=" * 80)
        print("🚀 RESUME STUDIO SERVER CONFIGURATION")
        print("=" * 80)

        for category, keys in categories.items():
            print(f"\n{category}")
            print("-" * 40)
            for key in keys:
                if hasattr(self, key):
                    value = str(getattr(self, key))
                    masked_value = mask_sensitive(key, value)
                    # Truncate long values
                    if len(masked_value) > 50:
                        masked_value = masked_value[:47] + "..."
                    print(f"  {key:30} = {masked_value}")

        print("\n" + "=" * 80)
        print("✅ Configuration loaded from: .env")
        print("=" * 80 + "\n")


# Create global settings instance
settings = Settings()
