"""
Centralized configuration for the Cookbook backend.

All settings are loaded from environment variables (prefixed COOKBOOK_)
with sensible defaults. Module-specific settings are namespaced by field
name (e.g., auth_*, activity_*, upload_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COOKBOOK_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Cookbook API"
    app_version: str = "0.1.0"
    environment: str = "production"  # development | production | test
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Session tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24

    # Credentials
    otp_ttl_minutes: int = 5
    bcrypt_rounds: int = 10

    # Rate limiting (authentication routes only)
    rate_limit_enabled: bool = True
    auth_rate_limit_requests: int = 20
    auth_rate_limit_window: int = 15 * 60  # seconds
    auth_max_body_bytes: int = 10 * 1024

    # Recipes
    bulk_max_ids: int = 100
    upload_bucket: str = "recipe-images"
    upload_max_bytes: int = 5 * 1024 * 1024

    # Activity feed
    activity_default_limit: int = 20
    activity_max_limit: int = 100
    broadcast_enabled: bool = True
    broadcast_queue_size: int = 100

    # Storage
    storage_backend: str = "memory"  # memory | supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URL, used by run_migrations.py

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def rate_limiting_active(self) -> bool:
        """Rate limiting is skipped entirely in the test environment."""
        return self.rate_limit_enabled and self.environment != "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
