from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, ValidationError, ValidationInfo, field_validator
from typing import Optional
import sys
from functools import lru_cache
import structlog

logger = structlog.get_logger()


class Settings(BaseSettings):
    """
    Account Service Configuration

    Secrets MUST be provided via environment variables.
    The service will fail fast if required security configurations are missing.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    # Application settings
    APP_NAME: str = "Account Service"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API settings
    API_V1_STR: str = "/api/v1"

    # Security settings - SECRET_KEY is REQUIRED, NO DEFAULT
    SECRET_KEY: str = Field(..., min_length=32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, ge=1, le=1440)
    PASSWORD_HASH_ROUNDS: int = Field(default=12, ge=4, le=31)
    REQUIRE_VERIFIED_EMAIL_FOR_LOGIN: bool = False

    # One-time codes for email verification
    OTP_LENGTH: int = Field(default=6, ge=4, le=10)
    OTP_EXPIRE_MINUTES: int = Field(default=10, ge=1, le=1440)

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./accounts.db"
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = Field(default=10, ge=1, le=200)
    DATABASE_MAX_OVERFLOW: int = Field(default=20, ge=0, le=200)
    DATABASE_CREATE_TABLES: bool = True

    # Email settings - when SMTP_HOST is unset codes are only logged
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_TLS: bool = True
    EMAILS_FROM_EMAIL: str = "no-reply@example.com"
    EMAILS_FROM_NAME: str = "Account Service"

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_keys(cls, v: str, info: ValidationInfo) -> str:
        """Validate that security keys are strong enough"""
        bad_values = ["your-secret-key", "change-me", "changeme", "password", "12345"]
        if any(bad in v.lower() for bad in bad_values):
            raise ValueError(f"{info.field_name} contains weak or default values")
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        valid_envs = ["development", "staging", "production", "test"]
        if v not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of: {valid_envs}")
        return v

    @property
    def smtp_enabled(self) -> bool:
        return bool(self.SMTP_HOST)


def validate_required_settings(settings: Settings) -> None:
    """
    Validate that all required settings are properly configured.
    Fail fast if critical settings are missing or invalid.
    """
    errors = []

    if settings.ENVIRONMENT == "production":
        if settings.DEBUG:
            errors.append("DEBUG must be False in production")

        if not settings.SMTP_HOST:
            errors.append("SMTP_HOST is required in production to deliver verification codes")

        if settings.DATABASE_URL.startswith("sqlite"):
            errors.append("DATABASE_URL cannot use SQLite in production")

    if settings.SMTP_HOST and settings.SMTP_USER and not settings.SMTP_PASSWORD:
        errors.append("SMTP_PASSWORD required when SMTP_USER is set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        logger.error(error_msg)
        raise ValueError(error_msg)

    logger.info(
        "Configuration validated successfully",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        smtp_enabled=settings.smtp_enabled,
        require_verified_login=settings.REQUIRE_VERIFIED_EMAIL_FOR_LOGIN,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Fails fast if required environment variables are missing.
    """
    try:
        settings = Settings()
        validate_required_settings(settings)
        return settings
    except ValidationError as e:
        logger.error("Failed to load settings", errors=e.errors())
        for error in e.errors():
            field = error.get("loc", ["unknown"])[0]
            msg = error.get("msg", "Invalid value")
            print(f"  - {field}: {msg}", file=sys.stderr)
        sys.exit(1)
