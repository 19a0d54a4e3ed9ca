"""
Senali Application Settings

Configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    model_config = SettingsConfigDict(env_prefix="SENALI_DB_")

    url: Optional[str] = Field(
        default=None,
        description="Full async SQLAlchemy URL; overrides the host/port fields",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="senali_db", description="Database name")
    user: str = Field(default="senali_user", description="Database user")
    password: SecretStr = Field(default=SecretStr("dev_password"), description="Database password")
    pool_size: int = Field(default=10, ge=1, le=100, description="Connection pool size")
    max_overflow: int = Field(default=20, ge=0, le=100, description="Max overflow connections")

    @property
    def async_url(self) -> str:
        """Generate async database URL for SQLAlchemy."""
        if self.url:
            return self.url
        password = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{password}@{self.host}:{self.port}/{self.name}"


class OpenAISettings(BaseSettings):
    """OpenAI API configuration."""

    model_config = SettingsConfigDict(env_prefix="SENALI_OPENAI_")

    api_key: SecretStr = Field(default=SecretStr(""), description="OpenAI API key")
    model: str = Field(default="gpt-4o", description="Model identifier")
    max_tokens: int = Field(default=1000, ge=100, le=4096)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    tip_max_tokens: int = Field(default=800, ge=100, le=4096)
    tip_temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    timeout_seconds: float = Field(default=60.0, gt=0)


class FirebaseSettings(BaseSettings):
    """Firebase Admin SDK configuration (ID token validation)."""

    model_config = SettingsConfigDict(env_prefix="SENALI_FIREBASE_")

    project_id: Optional[str] = Field(default=None, description="Firebase project ID")
    credentials_file: Optional[str] = Field(
        default=None,
        description="Path to a service account JSON file",
    )
    credentials_json: SecretStr = Field(
        default=SecretStr(""),
        description="Inline service account JSON",
    )
    check_revoked: bool = Field(default=False, description="Reject revoked ID tokens")


class BillingSettings(BaseSettings):
    """Credit and subscription rules."""

    model_config = SettingsConfigDict(env_prefix="SENALI_BILLING_")

    trial_credits: int = Field(default=25, ge=0, description="Credits granted at sign-up")
    monthly_credits: int = Field(default=1000, ge=0, description="Premium monthly allowance")
    refill_interval_days: int = Field(default=30, ge=1)
    credits_per_message: int = Field(default=1, ge=1)
    free_profile_limit: int = Field(
        default=1,
        ge=-1,
        description="Family profiles allowed on the free tier (-1 = unlimited)",
    )
    credit_packs: dict[str, int] = Field(
        default={"small": 500, "medium": 1000, "large": 2500},
        description="In-app credit packs by product name",
    )


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration."""

    model_config = SettingsConfigDict(env_prefix="SENALI_")

    rate_limit_enabled: bool = Field(default=True)
    rate_limit_requests_per_minute: int = Field(default=60, ge=1, le=1000)
    rate_limit_llm_requests_per_minute: int = Field(default=20, ge=1, le=1000)
    rate_limit_trust_forwarded_for: bool = Field(
        default=False,
        description="Key clients on the first X-Forwarded-For hop (only behind a trusted proxy)",
    )


class SentrySettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="SENALI_SENTRY_")

    dsn: str = Field(default="", description="Sentry DSN (empty disables)")
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with SENALI_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        db_url = settings.database.async_url
    """

    model_config = SettingsConfigDict(
        env_prefix="SENALI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_prefix: str = Field(default="/api", description="Mount point of the API router")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "capacitor://localhost"],
        description="Allowed CORS origins"
    )
    admin_emails: list[str] = Field(
        default_factory=list,
        description="Emails allowed to use the admin endpoints"
    )
    chat_history_limit: int = Field(
        default=10,
        ge=0,
        le=50,
        description="Messages of prior conversation sent to the model"
    )

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    firebase: FirebaseSettings = Field(default_factory=FirebaseSettings)
    billing: BillingSettings = Field(default_factory=BillingSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    def is_admin(self, email: Optional[str]) -> bool:
        """Check whether an email belongs to an administrator."""
        if not email:
            return False
        return email.lower() in {e.lower() for e in self.admin_emails}


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, use dependency injection to override.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
