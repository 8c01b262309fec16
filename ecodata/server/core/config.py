"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value):
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


# =====================================================================
# Grouped Configuration Models
# =====================================================================


class DatabaseConfig(BaseModel):
    """Storage backend configuration."""

    backend: str = Field(
        default="auto",
        alias="STORAGE_BACKEND",
        description="Storage backend: auto (database with in-memory fallback), database or memory",
    )
    url: Optional[str] = Field(default=None, alias="DATABASE_URL", description="PostgreSQL (or SQLite) connection URL")
    mssql_url: Optional[str] = Field(default=None, alias="MSSQL_URL", description="Microsoft SQL Server connection URL")
    seed_demo_data: bool = Field(
        default=False,
        alias="SEED_DEMO_DATA",
        description="Seed demo services, testimonials and impact metrics into an empty database",
    )

    model_config = {"populate_by_name": True}


class AuthConfig(BaseModel):
    """Authentication and default admin account configuration."""

    jwt_secret: str = Field(
        default="ecodata-dev-secret-change-me", alias="JWT_SECRET", description="Secret used to sign JWT tokens"
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm")
    jwt_expires_hours: int = Field(default=24, alias="JWT_EXPIRES_HOURS", description="JWT lifetime in hours")
    bcrypt_rounds: int = Field(default=10, alias="BCRYPT_ROUNDS", description="bcrypt cost factor")
    reset_token_ttl_minutes: int = Field(
        default=60, alias="PASSWORD_RESET_TOKEN_TTL_MINUTES", description="Password reset token lifetime"
    )
    admin_username: str = Field(default="admin", alias="ADMIN_USERNAME", description="Default admin username")
    admin_password: str = Field(default="admin123", alias="ADMIN_PASSWORD", description="Default admin password")
    admin_email: str = Field(
        default="admin@ecodatacic.org", alias="ADMIN_EMAIL", description="Default admin email address"
    )

    model_config = {"populate_by_name": True}


class EmailConfig(BaseModel):
    """SMTP configuration for outgoing notifications."""

    host: Optional[str] = Field(default=None, alias="EMAIL_HOST", description="SMTP server host")
    port: int = Field(default=587, alias="EMAIL_PORT", description="SMTP server port")
    secure: bool = Field(default=False, alias="EMAIL_SECURE", description="Use implicit TLS instead of STARTTLS")
    user: Optional[str] = Field(default=None, alias="EMAIL_USER", description="SMTP username")
    password: Optional[str] = Field(default=None, alias="EMAIL_PASSWORD", description="SMTP password")
    from_address: str = Field(default="noreply@ecodatacic.org", alias="EMAIL_FROM", description="Sender address")
    from_name: str = Field(default="ECODATA CIC", alias="EMAIL_FROM_NAME", description="Sender display name")
    admin_emails: List[str] = Field(
        default=["admin@ecodatacic.org"],
        alias="ADMIN_EMAILS",
        description="Recipients of admin notifications (comma separated)",
    )
    frontend_url: str = Field(
        default="http://localhost:5000", alias="FRONTEND_URL", description="Public website URL used in links"
    )

    model_config = {"populate_by_name": True}

    @field_validator("admin_emails", mode="before")
    @classmethod
    def _parse_admin_emails(cls, value):
        return _split_csv(value)


class StripeConfig(BaseModel):
    """Stripe payments configuration."""

    secret_key: Optional[str] = Field(default=None, alias="STRIPE_SECRET_KEY", description="Stripe secret API key")
    webhook_secret: Optional[str] = Field(
        default=None, alias="STRIPE_WEBHOOK_SECRET", description="Signing secret for the Stripe webhook endpoint"
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )

    model_config = {"populate_by_name": True}

    @field_validator("origins", mode="before")
    @classmethod
    def _parse_origins(cls, value):
        return _split_csv(value)


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # ECODATA Server Configuration
    # =====================================================================
    server_host: str = Field(default="0.0.0.0", description="Server host address to bind to", alias="ECODATA_SERVER_HOST")
    server_port: int = Field(default=5000, description="Server port number", alias="ECODATA_SERVER_PORT")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="ECODATA_LOG_LEVEL",
    )
    log_format: str = Field(default="detailed", description="Log format (simple, detailed, json)", alias="ECODATA_LOG_FORMAT")
    log_to_file: bool = Field(default=False, description="Also write logs to logs/ecodata.log", alias="ECODATA_LOG_TO_FILE")
    environment: str = Field(
        default="production", description="Deployment environment (development, production)", alias="ECODATA_ENVIRONMENT"
    )

    # =====================================================================
    # Storage Configuration
    # =====================================================================
    storage_backend: str = Field(default="auto", alias="STORAGE_BACKEND")
    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    mssql_url: Optional[str] = Field(default=None, alias="MSSQL_URL")
    seed_demo_data: bool = Field(default=False, alias="SEED_DEMO_DATA")

    # =====================================================================
    # Authentication Configuration
    # =====================================================================
    jwt_secret: str = Field(default="ecodata-dev-secret-change-me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_hours: int = Field(default=24, alias="JWT_EXPIRES_HOURS")
    bcrypt_rounds: int = Field(default=10, alias="BCRYPT_ROUNDS")
    password_reset_token_ttl_minutes: int = Field(default=60, alias="PASSWORD_RESET_TOKEN_TTL_MINUTES")
    admin_username: str = Field(default="admin", alias="ADMIN_USERNAME")
    admin_password: str = Field(default="admin123", alias="ADMIN_PASSWORD")
    admin_email: str = Field(default="admin@ecodatacic.org", alias="ADMIN_EMAIL")

    # =====================================================================
    # Email Configuration
    # =====================================================================
    email_host: Optional[str] = Field(default=None, alias="EMAIL_HOST")
    email_port: int = Field(default=587, alias="EMAIL_PORT")
    email_secure: bool = Field(default=False, alias="EMAIL_SECURE")
    email_user: Optional[str] = Field(default=None, alias="EMAIL_USER")
    email_password: Optional[str] = Field(default=None, alias="EMAIL_PASSWORD")
    email_from: str = Field(default="noreply@ecodatacic.org", alias="EMAIL_FROM")
    email_from_name: str = Field(default="ECODATA CIC", alias="EMAIL_FROM_NAME")
    admin_emails: str = Field(default="admin@ecodatacic.org", alias="ADMIN_EMAILS")
    frontend_url: str = Field(default="http://localhost:5000", alias="FRONTEND_URL")

    # =====================================================================
    # Stripe Configuration
    # =====================================================================
    stripe_secret_key: Optional[str] = Field(default=None, alias="STRIPE_SECRET_KEY")
    stripe_webhook_secret: Optional[str] = Field(default=None, alias="STRIPE_WEBHOOK_SECRET")

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def database(self) -> DatabaseConfig:
        """Get storage configuration from environment variables."""
        return DatabaseConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def auth(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        return AuthConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def email(self) -> EmailConfig:
        """Get SMTP configuration from environment variables."""
        return EmailConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def stripe(self) -> StripeConfig:
        """Get Stripe configuration from environment variables."""
        return StripeConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
