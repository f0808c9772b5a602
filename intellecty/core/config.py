"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Production-only requirements (e.g. CACHE_OBFUSCATION_KEY)
are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Used only outside production so local runs work without a .env file.
DEV_CACHE_OBFUSCATION_KEY = "intellecty-dev-obfuscation-key"


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults. In production the cache obfuscation key
    must be set explicitly; see validate_environment.
    """

    # App
    app_name: str = "intellecty-retail"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Tenant
    tenant_header_name: str = "X-Tenant-ID"
    default_tenant_id: str = "demo-tenant"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"
    max_upload_size: int = 10 * 1024 * 1024  # 10MB

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_max_connections: int = 20
    redis_connect_timeout: float = 10.0
    redis_socket_timeout: float = 5.0
    cache_obfuscation_key: SecretStr = SecretStr("")
    cache_default_ttl: int = 3600
    cache_lock_ttl: int = 10
    cache_ttl_external_api: int = 3600
    cache_ttl_forecast: int = 3600
    cache_ttl_analytics: int = 900
    cache_ttl_uploads: int = 86400
    cache_ttl_usage: int = 86400

    # External APIs
    openweather_api_key: SecretStr | None = None
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    external_api_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @model_validator(mode="after")
    def validate_environment(self) -> "Settings":
        """Apply development fallbacks or reject missing production secrets.

        - Production: CACHE_OBFUSCATION_KEY required.
        - Elsewhere: a fixed development key is used when unset.
        """
        if not self.cache_obfuscation_key.get_secret_value():
            if self.is_production:
                raise ValueError(
                    "CACHE_OBFUSCATION_KEY is required in production. "
                    "Generate with: openssl rand -hex 32."
                )
            self.cache_obfuscation_key = SecretStr(DEV_CACHE_OBFUSCATION_KEY)
        if self.cache_lock_ttl <= 0:
            raise ValueError("cache_lock_ttl must be a positive number of seconds")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
