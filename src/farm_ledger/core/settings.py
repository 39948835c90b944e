"""Application settings and configuration.

This module defines all configuration options for the Farm Ledger API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SECRET_KEY = "farm-ledger-development-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a ``.env`` file.
    """

    # Application metadata
    app_name: str = Field(default="Farm Ledger API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5001, alias="PORT")

    # Database configuration
    database_url: str = Field(default="sqlite:///./farm.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    init_db_on_startup: bool = Field(default=True, alias="INIT_DB_ON_STARTUP")

    # JWT authentication settings
    secret_key: str = Field(default=DEV_SECRET_KEY, alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Password hashing work factor
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # Fixed-window rate limiting
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_window_seconds: int = Field(default=15 * 60, alias="RATE_LIMIT_WINDOW_SECONDS")
    auth_rate_limit_max: int = Field(default=5, alias="AUTH_RATE_LIMIT_MAX")
    api_rate_limit_max: int = Field(default=100, alias="API_RATE_LIMIT_MAX")

    # In-memory login activity log
    login_activity_limit: int = Field(default=100, alias="LOGIN_ACTIVITY_LIMIT")

    # TOTP two-factor authentication
    totp_issuer: str = Field(default="FarmApp", alias="TOTP_ISSUER")
    totp_valid_window: int = Field(default=0, ge=0, alias="TOTP_VALID_WINDOW")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str | None = Field(default=None, alias="LOG_DIR")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def uses_development_secret(self) -> bool:
        """Return True while the built-in development signing secret is active."""
        return self.secret_key == DEV_SECRET_KEY

    @property
    def rate_limits(self) -> dict[str, int]:
        """Return the per-bucket request ceilings as a convenience dictionary."""
        return {
            "auth": self.auth_rate_limit_max,
            "general": self.api_rate_limit_max,
        }


settings = Settings()
