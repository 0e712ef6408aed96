"""
Configuration management for the expense tracker.
"""

from decimal import Decimal
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerConfig(BaseSettings):
    """Configuration settings for the expense tracker."""

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./expense_tracker.db", alias="DATABASE_URL"
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # Authentication Configuration
    jwt_secret: str = Field(default="change-me-in-production", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_days: int = Field(default=7, gt=0, alias="JWT_EXPIRES_DAYS")
    otp_expiry_minutes: int = Field(default=30, gt=0, alias="OTP_EXPIRY_MINUTES")
    min_password_length: int = Field(default=6, gt=0, alias="MIN_PASSWORD_LENGTH")

    # Email (SMTP) Configuration
    smtp_host: str = Field(default="localhost", alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_username: Optional[str] = Field(default=None, alias="SMTP_USERNAME")
    smtp_password: Optional[str] = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    smtp_timeout: float = Field(default=10.0, alias="SMTP_TIMEOUT")
    email_from_name: str = Field(default="SummitCoreHomes", alias="EMAIL_FROM_NAME")
    email_from_address: str = Field(
        default="no-reply@example.com", alias="EMAIL_FROM_ADDRESS"
    )

    # Document Configuration
    company_name: str = Field(default="Summit core LLC", alias="COMPANY_NAME")
    company_location: str = Field(default="United States", alias="COMPANY_LOCATION")
    company_logo_path: Optional[str] = Field(default=None, alias="COMPANY_LOGO_PATH")

    # Business Rules
    default_tax_rate: Decimal = Field(
        default=Decimal("16"), ge=0, le=100, alias="DEFAULT_TAX_RATE"
    )
    admin_fee_percentage: Decimal = Field(
        default=Decimal("5"), ge=0, le=100, alias="ADMIN_FEE_PERCENTAGE"
    )

    # API Configuration
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        alias="CORS_ORIGINS",
    )
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=5000, alias="API_PORT")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v):
        """Only HMAC algorithms are supported with a shared secret."""
        valid_algorithms = ["HS256", "HS384", "HS512"]
        if v.upper() not in valid_algorithms:
            raise ValueError(f"JWT algorithm must be one of: {valid_algorithms}")
        return v.upper()

    @model_validator(mode="after")
    def validate_production_secret(self) -> "TrackerConfig":
        """Refuse to run production with the placeholder or a short secret."""
        if self.environment == "production" and (
            self.jwt_secret == "change-me-in-production" or len(self.jwt_secret) < 32
        ):
            raise ValueError(
                "JWT_SECRET must be set to at least 32 characters in production"
            )
        return self


def load_config(env_file: Optional[str] = None) -> TrackerConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return TrackerConfig()


# Global configuration instance
_config: Optional[TrackerConfig] = None


def get_config() -> TrackerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> TrackerConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
